class ExtractionError(Exception):
    """Raised when classification or field extraction fails."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class ExtractionResponseError(ExtractionError):
    """Raised when the AI response cannot be parsed into a record."""


class ClassificationError(ExtractionError):
    """Raised when a document could not be assigned one of the known types."""

    MESSAGE = "document type not recognized"

    def __init__(self, message: str = MESSAGE) -> None:
        super().__init__(message)
