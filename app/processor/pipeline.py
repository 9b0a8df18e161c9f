from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.documents.models import (
    Classification,
    ExtractedRecord,
    InputFile,
    SuccessfulDocument,
)


@dataclass(slots=True)
class FileContext:
    """Accumulates data as one input file moves through the processing steps."""

    file: InputFile
    classification: Classification | None = None
    record: ExtractedRecord | None = None
    document: SuccessfulDocument | None = None


class ProcessingStep(ABC):
    @abstractmethod
    async def run(self, context: FileContext) -> FileContext:
        raise NotImplementedError
