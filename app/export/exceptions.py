class ExportError(Exception):
    """Base exception for spreadsheet and archive output."""


class NothingToExportError(ExportError):
    """Raised when there are no successful documents to write."""


class SpreadsheetExportError(ExportError):
    """Raised when the workbook cannot be written."""


class ArchiveGenerationError(ExportError):
    """Raised when the renamed-file archive cannot be written."""
