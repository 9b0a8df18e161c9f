from app.documents.models import (
    FAILURE_MARKER,
    Classification,
    DocumentType,
    FailedDocument,
    InputFile,
    ProcessedDocument,
    SuccessfulDocument,
    is_failure,
)
from app.documents.normalizer import normalize
from app.documents.sorter import sort_documents

__all__ = [
    "FAILURE_MARKER",
    "Classification",
    "DocumentType",
    "FailedDocument",
    "InputFile",
    "ProcessedDocument",
    "SuccessfulDocument",
    "is_failure",
    "normalize",
    "sort_documents",
]
