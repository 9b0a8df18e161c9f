import asyncio
from unittest.mock import AsyncMock, MagicMock

from app.config.settings import Settings
from app.documents.models import (
    Classification,
    DocumentType,
    FailedDocument,
    InputFile,
    WorkOrderDocument,
    WorkOrderFields,
)
from app.extraction.base import BaseDocumentClassifier, BaseFieldExtractor
from app.extraction.exceptions import ExtractionNetworkError
from app.extraction.factory import ExtractionServices
from app.processor.pipeline import FileContext, ProcessingStep
from app.processor.processor import GENERIC_FAILURE_MESSAGE, DocumentProcessor, build_processor


def _make_file(name: str = "scan.pdf") -> InputFile:
    return InputFile(name=name, content=b"%PDF")


def _make_services(
    classification: Classification = Classification.WORK_ORDER,
    extract_error: Exception | None = None,
) -> ExtractionServices:
    classifier = MagicMock(spec=BaseDocumentClassifier)
    classifier.classify = AsyncMock(return_value=classification)
    extractor = MagicMock(spec=BaseFieldExtractor)
    if extract_error is not None:
        extractor.extract = AsyncMock(side_effect=extract_error)
    else:
        extractor.extract = AsyncMock(return_value=WorkOrderFields(orden="OT-5", fecha_registro="01-02-24"))
    return ExtractionServices(
        classifier=classifier,
        extractors={DocumentType.WORK_ORDER: extractor},
    )


class _FailingStep(ProcessingStep):
    def __init__(self, error: Exception) -> None:
        self._error = error

    async def run(self, context: FileContext) -> FileContext:
        raise self._error


class TestDocumentProcessor:
    def test_success_returns_normalized_document(self) -> None:
        processor = build_processor(Settings(_env_file=None), _make_services())
        doc = asyncio.run(processor.process_file(_make_file()))
        assert isinstance(doc, WorkOrderDocument)
        assert doc.orden == "OT-5"
        assert doc.archivo == "OT-5.pdf"
        assert doc.original_file_name == "scan.pdf"

    def test_unknown_classification_becomes_failure(self) -> None:
        processor = build_processor(
            Settings(_env_file=None), _make_services(Classification.UNKNOWN)
        )
        doc = asyncio.run(processor.process_file(_make_file("x.pdf")))
        assert doc == FailedDocument(
            original_file_name="x.pdf", error="document type not recognized"
        )

    def test_extraction_error_becomes_failure_with_message(self) -> None:
        services = _make_services(
            extract_error=ExtractionNetworkError("AI provider network error: timeout")
        )
        processor = build_processor(Settings(_env_file=None), services)
        doc = asyncio.run(processor.process_file(_make_file()))
        assert isinstance(doc, FailedDocument)
        assert doc.error == "AI provider network error: timeout"

    def test_empty_error_message_gets_generic_text(self) -> None:
        processor = DocumentProcessor(steps=[_FailingStep(RuntimeError())])
        doc = asyncio.run(processor.process_file(_make_file()))
        assert isinstance(doc, FailedDocument)
        assert doc.error == GENERIC_FAILURE_MESSAGE

    def test_steps_without_document_fail(self) -> None:
        processor = DocumentProcessor(steps=[])
        doc = asyncio.run(processor.process_file(_make_file()))
        assert isinstance(doc, FailedDocument)
        assert "without a document" in doc.error
