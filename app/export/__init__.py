from app.export.archive import ArchiveBuilder
from app.export.spreadsheet import SpreadsheetExporter

__all__ = ["ArchiveBuilder", "SpreadsheetExporter"]
