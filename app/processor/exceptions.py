class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class FileReadError(ProcessorError):
    """Raised when an input file cannot be read from disk."""


class UnsupportedFileTypeError(ProcessorError):
    """Raised when an input path is not a PDF."""


class RetryLookupError(ProcessorError):
    """Raised when no input file matches a document's original file name."""


class RetryInProgressError(ProcessorError):
    """Raised when a retry is requested for a document that is already being retried."""


class DocumentEditError(ProcessorError):
    """Raised when a field edit targets a missing document, a failure or an unknown field."""
