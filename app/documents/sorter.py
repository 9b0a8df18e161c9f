from collections.abc import Iterable
from typing import assert_never

from app.documents.dates import parse_sortable_date
from app.documents.models import (
    FailedDocument,
    InstallationDocument,
    ProcessedDocument,
    SupplyRequestDocument,
    UninstallationDocument,
    WorkOrderDocument,
)


def sort_date_field(document: ProcessedDocument) -> str:
    """The raw date string a document is ordered by ('' when it has none)."""
    if isinstance(document, (WorkOrderDocument, SupplyRequestDocument)):
        return document.fecha_registro
    if isinstance(document, (UninstallationDocument, InstallationDocument)):
        return document.fecha
    if isinstance(document, FailedDocument):
        return ""
    assert_never(document)


def sort_key(document: ProcessedDocument) -> float:
    return parse_sortable_date(sort_date_field(document))


def sort_documents(documents: Iterable[ProcessedDocument]) -> list[ProcessedDocument]:
    """Ascending by sortable date; undated documents last, ties keep input order."""
    # sorted() is guaranteed stable.
    return sorted(documents, key=sort_key)
