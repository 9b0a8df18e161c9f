from app.documents.models import DocumentType
from app.documents.normalizer import normalize
from app.extraction.base import BaseDocumentClassifier, BaseFieldExtractor
from app.extraction.exceptions import ClassificationError
from app.logging.logger import Log
from app.processor.pipeline import FileContext, ProcessingStep


def _document_type(context: FileContext) -> DocumentType:
    if context.classification is None:
        raise ValueError("FileContext.classification must be set before this step")
    document_type = context.classification.document_type
    if document_type is None:
        raise ClassificationError()
    return document_type


class ClassifyStep(ProcessingStep):
    def __init__(self, classifier: BaseDocumentClassifier) -> None:
        self._classifier = classifier

    async def run(self, context: FileContext) -> FileContext:
        context.classification = await self._classifier.classify(context.file.content)
        Log.info(
            f"Classified {context.file.name} as {context.classification.value}",
            file=context.file.name,
        )
        _document_type(context)
        return context


class ExtractStep(ProcessingStep):
    def __init__(self, extractors: dict[DocumentType, BaseFieldExtractor]) -> None:
        self._extractors = extractors

    async def run(self, context: FileContext) -> FileContext:
        document_type = _document_type(context)
        extractor = self._extractors.get(document_type)
        if extractor is None:
            raise ValueError(f"No extractor configured for {document_type.value}")
        context.record = await extractor.extract(context.file.content)
        return context


class NormalizeStep(ProcessingStep):
    async def run(self, context: FileContext) -> FileContext:
        if context.record is None:
            raise ValueError("FileContext.record must be set before normalization")
        context.document = normalize(
            _document_type(context), context.record, context.file.name
        )
        Log.info(
            f"Normalized {context.file.name} -> {context.document.archivo}",
            file=context.file.name,
        )
        return context
