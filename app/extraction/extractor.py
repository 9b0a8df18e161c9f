"""AI-powered field extraction for one document type."""

import json
from pathlib import Path

from app.documents.models import EXTRACTED_RECORD_TYPES, DocumentType, ExtractedRecord
from app.extraction.base import BaseFieldExtractor
from app.extraction.client_base import BaseVisionClient
from app.extraction.exceptions import ExtractionResponseError
from app.extraction.prompt_loader import load_json_schema, load_prompt_template
from app.logging.logger import Log


class AiFieldExtractor(BaseFieldExtractor):
    """Extracts a type-specific flat record from a scanned PDF."""

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        document_type: DocumentType,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self.document_type = document_type
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._record_cls = EXTRACTED_RECORD_TYPES[document_type]

        schema_str = load_json_schema(document_type, json_schema_path)
        self._json_schema_dict = json.loads(schema_str)
        self._check_schema_matches_record()
        self._prompt = load_prompt_template(document_type, prompt_template_path).format(
            json_schema=schema_str.strip(),
        )

    async def extract(self, pdf_bytes: bytes) -> ExtractedRecord:
        Log.debug(f"Extraction prompt ({self.document_type.value}):\n{self._prompt}")
        raw_response = await self._client.generate(
            model=self._model,
            temperature=self._temperature,
            prompt=self._prompt,
            pdf_bytes=pdf_bytes,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        record = self._record_cls.from_mapping(self._parse_json(raw_response))
        Log.info(f"Extracted {self.document_type.value} record")
        return record

    def _check_schema_matches_record(self) -> None:
        properties = self._json_schema_dict.get("properties", {})
        expected = set(self._record_cls.json_keys())
        if set(properties) != expected:
            raise ValueError(
                f"{self.document_type.value} schema properties {sorted(properties)} "
                f"do not match record fields {sorted(expected)}"
            )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionResponseError("JSON response must be an object")
        return parsed
