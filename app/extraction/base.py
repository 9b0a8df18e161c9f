from abc import ABC, abstractmethod

from app.documents.models import Classification, DocumentType, ExtractedRecord


class BaseDocumentClassifier(ABC):
    """Contract for document classifiers."""

    @abstractmethod
    async def classify(self, pdf_bytes: bytes) -> Classification:
        """Decide which record type a PDF holds.

        Fails closed: transport or parsing problems are reported as
        Classification.UNKNOWN, never raised.
        """


class BaseFieldExtractor(ABC):
    """Contract for per-type field extractors."""

    document_type: DocumentType

    @abstractmethod
    async def extract(self, pdf_bytes: bytes) -> ExtractedRecord:
        """Extract the flat record for this extractor's document type.

        Fields missing from the response default to ''.

        Raises:
            ExtractionError: on provider failure or a malformed response.
        """
