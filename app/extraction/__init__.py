from app.extraction.base import BaseDocumentClassifier, BaseFieldExtractor
from app.extraction.factory import ExtractionFactory, ExtractionServices

__all__ = [
    "BaseDocumentClassifier",
    "BaseFieldExtractor",
    "ExtractionFactory",
    "ExtractionServices",
]
