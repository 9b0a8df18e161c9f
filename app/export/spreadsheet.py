from collections.abc import Mapping, Sequence
from pathlib import Path

import openpyxl
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from app.documents.models import DocumentType, ProcessedDocument, SuccessfulDocument, successful_of_type
from app.export.columns import FILE_COLUMN, SHEET_LAYOUTS, SheetLayout, to_row
from app.export.exceptions import NothingToExportError, SpreadsheetExportError
from app.logging.logger import Log

DEFAULT_FILE_NAME = "Documentos_Procesados.xlsx"

_FONT_NAME = "Aptos Narrow"
_CELL_FONT = Font(name=_FONT_NAME, size=11)
_HEADER_FONT = Font(name=_FONT_NAME, size=11, bold=True)
_ALIGNMENT = Alignment(vertical="top", wrap_text=True)


class SpreadsheetExporter:
    """Writes successful documents to a workbook with one sheet per type."""

    def export(
        self,
        documents: Sequence[ProcessedDocument],
        path: Path,
        link_base_urls: Mapping[DocumentType, str] | None = None,
    ) -> Path:
        """Write the workbook; failed documents are left out.

        Sheets are created only for types with at least one document. When a
        type has a base URL, its ARCHIVOS cells link to `{base_url}/{archivo}`.

        Raises:
            NothingToExportError: if there is no successful document.
            SpreadsheetExportError: if the file cannot be written.
        """
        link_base_urls = link_base_urls or {}
        workbook = openpyxl.Workbook()
        workbook.remove(workbook.active)

        written = 0
        for document_type, layout in SHEET_LAYOUTS.items():
            rows = successful_of_type(documents, document_type)
            if not rows:
                continue
            sheet = workbook.create_sheet(layout.title)
            self._fill_sheet(sheet, layout, rows, link_base_urls.get(document_type, ""))
            written += len(rows)

        if written == 0:
            raise NothingToExportError("No successfully processed documents to export")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            workbook.save(path)
        except OSError as exc:
            raise SpreadsheetExportError(f"Cannot write {path}: {exc}") from exc
        Log.info(f"Exported {written} documents to {path}")
        return path

    def _fill_sheet(
        self,
        sheet: Worksheet,
        layout: SheetLayout,
        documents: list[SuccessfulDocument],
        base_url: str,
    ) -> None:
        sheet.append(list(layout.headers))
        for doc in documents:
            sheet.append(list(to_row(doc)))

        for column, width in enumerate(layout.widths, start=1):
            sheet.column_dimensions[get_column_letter(column)].width = width
        for row in sheet.iter_rows():
            for cell in row:
                cell.font = _HEADER_FONT if cell.row == 1 else _CELL_FONT
                cell.alignment = _ALIGNMENT

        prefix = _link_prefix(base_url)
        if prefix:
            file_column = layout.headers.index(FILE_COLUMN) + 1
            for row_index, doc in enumerate(documents, start=2):
                cell = sheet.cell(row=row_index, column=file_column)
                if cell.value:
                    cell.hyperlink = f"{prefix}{doc.archivo}"


def _link_prefix(base_url: str) -> str:
    base_url = base_url.strip()
    if not base_url:
        return ""
    return base_url if base_url.endswith("/") else f"{base_url}/"
