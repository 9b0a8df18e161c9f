from collections.abc import Iterable
from pathlib import Path

from app.documents.models import InputFile
from app.logging.logger import Log
from app.processor.exceptions import FileReadError, UnsupportedFileTypeError

PDF_SUFFIX = ".pdf"


class FileLoader:
    """Reads PDFs from disk into InputFiles.

    The original file name is the key that links a processed document back to
    its bytes, so a second file with an already-seen name is skipped.
    """

    def load_paths(self, paths: Iterable[Path]) -> list[InputFile]:
        """Load files and directories in the given order.

        Directories contribute their PDFs sorted by name; non-PDF files are
        skipped with a warning.

        Raises:
            FileNotFoundError: if a path does not exist.
            FileReadError: if a PDF cannot be read.
        """
        files: list[InputFile] = []
        seen: set[str] = set()
        for path in paths:
            candidates = self._expand(path)
            for candidate in candidates:
                try:
                    input_file = self.load(candidate)
                except UnsupportedFileTypeError as exc:
                    Log.warning(f"Skipping {candidate}: {exc}")
                    continue
                if input_file.name in seen:
                    Log.warning(f"Skipping {candidate}: a file named {input_file.name} is already loaded")
                    continue
                seen.add(input_file.name)
                files.append(input_file)
        Log.info(f"Loaded {len(files)} PDF files")
        return files

    def load(self, path: Path) -> InputFile:
        """Read a single PDF.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedFileTypeError: if the file is not a PDF.
            FileReadError: if the file cannot be read.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if path.suffix.lower() != PDF_SUFFIX:
            raise UnsupportedFileTypeError("only PDF files are accepted")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read {path}: {exc}") from exc
        return InputFile(name=path.name, content=content)

    @staticmethod
    def _expand(path: Path) -> list[Path]:
        if path.is_dir():
            return sorted(p for p in path.iterdir() if p.is_file())
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return [path]
