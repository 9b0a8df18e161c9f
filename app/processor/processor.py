from app.config.settings import Settings
from app.documents.models import FailedDocument, InputFile, ProcessedDocument
from app.extraction.exceptions import ExtractionError
from app.extraction.factory import ExtractionFactory, ExtractionServices
from app.logging.logger import Log
from app.pdf.exceptions import PdfRenderError
from app.processor.pipeline import FileContext, ProcessingStep
from app.processor.steps import ClassifyStep, ExtractStep, NormalizeStep

GENERIC_FAILURE_MESSAGE = "unknown processing error"


class DocumentProcessor:
    """Runs classify -> extract -> normalize for one input file.

    This is the only place a per-file exception is turned into a
    FailedDocument; the batch pipeline and the retry controller both go
    through it.
    """

    def __init__(self, steps: list[ProcessingStep]) -> None:
        self._steps = steps

    async def process_file(self, file: InputFile) -> ProcessedDocument:
        context = FileContext(file=file)
        try:
            for step in self._steps:
                context = await step.run(context)
            if context.document is None:
                raise ValueError("processing finished without a document")
        except (ExtractionError, PdfRenderError) as exc:
            message = str(exc) or GENERIC_FAILURE_MESSAGE
            Log.error(f"Failed to process {file.name}: {message}", file=file.name)
            return FailedDocument(original_file_name=file.name, error=message)
        except Exception as exc:
            # Anything else is a bug; keep the traceback.
            message = str(exc) or GENERIC_FAILURE_MESSAGE
            Log.exception(f"Unexpected error processing {file.name}: {message}", file=file.name)
            return FailedDocument(original_file_name=file.name, error=message)
        return context.document


def build_processor(
    settings: Settings,
    services: ExtractionServices | None = None,
) -> DocumentProcessor:
    """Build a DocumentProcessor wired to the configured AI provider."""
    if services is None:
        services = ExtractionFactory.create(settings)
    return DocumentProcessor(
        steps=[
            ClassifyStep(services.classifier),
            ExtractStep(services.extractors),
            NormalizeStep(),
        ]
    )
