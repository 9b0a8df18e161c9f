import httpx
from google import genai
from google.genai import errors, types

from app.extraction.client_base import BaseVisionClient
from app.extraction.exceptions import ExtractionError, ExtractionNetworkError


class GeminiClientAdapter(BaseVisionClient):
    """Vision client built on the Gemini API; the PDF is sent inline as-is."""

    def __init__(self, *, api_key: str, timeout_seconds: int) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_seconds * 1000),
        )

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        pdf_bytes: bytes,
        json_schema: dict[str, object] | None,
    ) -> str:
        if json_schema is None:
            config = types.GenerateContentConfig(temperature=temperature)
        else:
            config = types.GenerateContentConfig(
                temperature=temperature,
                response_mime_type="application/json",
                response_schema=json_schema,
            )
        contents = [
            types.Part.from_bytes(data=pdf_bytes, mime_type="application/pdf"),
            prompt,
        ]

        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except httpx.TransportError as exc:
            raise ExtractionNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except errors.APIError as exc:
            raise ExtractionNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        text = response.text
        if not text:
            raise ExtractionError("AI returned empty response")
        return text
