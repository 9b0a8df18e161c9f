import zipfile
from collections.abc import Sequence
from pathlib import Path, PurePath

from app.documents.models import DocumentType, InputFile, ProcessedDocument, successful_of_type
from app.export.exceptions import ArchiveGenerationError, NothingToExportError
from app.logging.logger import Log

DEFAULT_ARCHIVE_NAMES: dict[DocumentType, str] = {
    DocumentType.WORK_ORDER: "Ordenes_de_Trabajo_Renombradas.zip",
    DocumentType.SUPPLY_REQUEST: "Pedidos_de_Suministro_Renombrados.zip",
    DocumentType.UNINSTALLATION: "Desinstalaciones_Renombradas.zip",
    DocumentType.INSTALLATION: "Instalaciones_Renombradas.zip",
}


class ArchiveBuilder:
    """Zips the original PDFs of one document type under their export names."""

    def build(
        self,
        documents: Sequence[ProcessedDocument],
        files: Sequence[InputFile],
        document_type: DocumentType,
        path: Path,
    ) -> Path:
        """Write a zip with one entry per successful document of `document_type`.

        Each entry holds the original file's bytes named after `archivo`;
        repeated names get a ` (n)` suffix. Documents whose input file is no
        longer available are skipped.

        Raises:
            NothingToExportError: if no entry would be written.
            ArchiveGenerationError: if the archive cannot be written.
        """
        by_name = {file.name: file for file in files}
        entries: list[tuple[str, bytes]] = []
        used: set[str] = set()
        for doc in successful_of_type(documents, document_type):
            file = by_name.get(doc.original_file_name)
            if file is None:
                Log.warning(f"Original file {doc.original_file_name} not found; left out of archive")
                continue
            entry_name = _unique_name(_safe_entry_name(doc.archivo), used)
            used.add(entry_name)
            entries.append((entry_name, file.content))

        if not entries:
            raise NothingToExportError(f"No {document_type.value} documents to archive")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                for entry_name, content in entries:
                    archive.writestr(entry_name, content)
        except (OSError, zipfile.BadZipFile) as exc:
            raise ArchiveGenerationError(f"Cannot write archive {path}: {exc}") from exc
        Log.info(f"Archived {len(entries)} {document_type.value} files to {path}")
        return path


def _safe_entry_name(name: str) -> str:
    # `archivo` comes from OCR; keep only the final path component.
    return PurePath(name.replace("\\", "/")).name or "documento.pdf"


def _unique_name(name: str, used: set[str]) -> str:
    if name not in used:
        return name
    path = PurePath(name)
    counter = 1
    while True:
        candidate = f"{path.stem} ({counter}){path.suffix}"
        if candidate not in used:
            return candidate
        counter += 1
