"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in ExtractionFactory.
"""

import json
from typing import ClassVar

from app.documents.models import Classification
from app.extraction.client_base import BaseVisionClient
from app.extraction.exceptions import ExtractionError


class ExampleClientAdapter(BaseVisionClient):
    """Example adapter that answers with fixed, valid responses.

    No network calls. Every document is classified as `verdict`; extraction
    returns SAMPLE_VALUES for the keys the requested schema declares and ''
    for the rest. Useful for local dry runs and tests.
    """

    SAMPLE_VALUES: ClassVar[dict[str, str]] = {
        "orden": "EJEMPLO-0001",
        "folio": "EJEMPLO-0001",
        "serie": "3353PA50032",
        "fechaRegistro": "01-01-25",
        "fecha": "01-01-25",
        "categoria": "CORRECTIVO",
    }

    def __init__(self, verdict: Classification = Classification.WORK_ORDER) -> None:
        self._verdict = verdict

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        pdf_bytes: bytes,
        json_schema: dict[str, object] | None,
    ) -> str:
        _ = model, temperature, prompt, pdf_bytes
        if json_schema is None:
            return self._verdict.value
        properties = json_schema.get("properties", {})
        if not isinstance(properties, dict):
            raise ExtractionError("JSON schema properties must be an object")
        return json.dumps({key: self.SAMPLE_VALUES.get(key, "") for key in properties})
