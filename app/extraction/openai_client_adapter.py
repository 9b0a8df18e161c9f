import asyncio
import base64
import copy
from typing import Any

import httpx
import openai

from app.extraction.client_base import BaseVisionClient
from app.extraction.exceptions import ExtractionError, ExtractionNetworkError
from app.pdf.base import BasePdfRasterizer


class OpenAIClientAdapter(BaseVisionClient):
    """Vision client built on the OpenAI-compatible chat API.

    Chat-completions providers take images rather than PDFs, so the leading
    pages are rasterized to PNG and sent as data URLs.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        rasterizer: BasePdfRasterizer,
        render_dpi: int = 150,
        max_pages: int = 4,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._rasterizer = rasterizer
        self._render_dpi = render_dpi
        self._max_pages = max_pages

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        pdf_bytes: bytes,
        json_schema: dict[str, object] | None,
    ) -> str:
        pages = await asyncio.to_thread(
            self._rasterizer.render,
            pdf_bytes,
            dpi=self._render_dpi,
            max_pages=self._max_pages,
        )
        content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
        content.extend(
            {
                "type": "image_url",
                "image_url": {
                    "url": "data:image/png;base64," + base64.b64encode(png).decode("ascii")
                },
            }
            for png in pages
        )

        request: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "messages": [{"role": "user", "content": content}],
        }
        if json_schema is not None:
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "extracted_record",
                    "strict": True,
                    "schema": self._strict_schema(json_schema),
                },
            }

        try:
            response = await self._client.chat.completions.create(**request)
        except (openai.APIConnectionError, httpx.TransportError) as exc:
            raise ExtractionNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise ExtractionError("AI returned no choices")
        text = response.choices[0].message.content
        if text is None:
            raise ExtractionError("AI returned empty response")
        return text

    @staticmethod
    def _strict_schema(json_schema: dict[str, object]) -> dict[str, object]:
        # Strict structured outputs reject objects that allow extra keys.
        schema = copy.deepcopy(json_schema)
        schema["additionalProperties"] = False
        return schema
