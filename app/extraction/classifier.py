from pathlib import Path

from app.documents.models import Classification
from app.extraction.base import BaseDocumentClassifier
from app.extraction.client_base import BaseVisionClient
from app.extraction.exceptions import ExtractionError
from app.extraction.prompt_loader import load_classification_prompt
from app.logging.logger import Log
from app.pdf.exceptions import PdfRenderError


class AiDocumentClassifier(BaseDocumentClassifier):
    """Classifies a PDF by asking the AI provider for a one-word verdict."""

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._prompt = load_classification_prompt(prompt_path)

    async def classify(self, pdf_bytes: bytes) -> Classification:
        try:
            raw = await self._client.generate(
                model=self._model,
                temperature=0.0,
                prompt=self._prompt,
                pdf_bytes=pdf_bytes,
                json_schema=None,
            )
        except (ExtractionError, PdfRenderError) as exc:
            Log.warning(f"Classification failed, treating document as unknown: {exc}")
            return Classification.UNKNOWN

        Log.debug(f"Classifier raw response: {raw!r}")
        verdict = Classification.parse(self._clean(raw))
        if verdict is Classification.UNKNOWN:
            Log.warning(f"Classifier returned an unrecognized verdict: {raw.strip()!r}")
        return verdict

    @staticmethod
    def _clean(raw: str) -> str:
        return raw.strip().strip("`").strip().strip("'\"").strip().rstrip(".")
