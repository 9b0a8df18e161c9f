from pathlib import Path

from app.documents.models import DocumentType
from app.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_classification_prompt(path: Path | None = None) -> str:
    """Load the classification prompt.

    Args:
        path: Prompt file. Defaults to the bundled classification_prompt.txt.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "classification_prompt.txt"
    return _read(path, "classification prompt")


def load_prompt_template(document_type: DocumentType, path: Path | None = None) -> str:
    """Load the extraction prompt template for one document type.

    The template carries a `{json_schema}` placeholder.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / f"{document_type.value}_prompt.txt"
    return _read(path, f"{document_type.value} prompt template")


def load_json_schema(document_type: DocumentType, path: Path | None = None) -> str:
    """Load the raw JSON schema string for one document type.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / f"{document_type.value}_schema.json"
    return _read(path, f"{document_type.value} JSON schema")


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load {what}: {exc}") from exc
