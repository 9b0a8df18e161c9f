import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from app.extraction.exceptions import ExtractionError, ExtractionNetworkError
from app.extraction.openai_client_adapter import OpenAIClientAdapter
from app.pdf.base import BasePdfRasterizer


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _make_adapter(
    create: AsyncMock, pages: list[bytes] | None = None
) -> tuple[OpenAIClientAdapter, MagicMock]:
    mock_client = MagicMock()
    mock_client.chat.completions.create = create
    rasterizer = MagicMock(spec=BasePdfRasterizer)
    rasterizer.render.return_value = pages if pages is not None else [b"png-1"]
    with patch(
        "app.extraction.openai_client_adapter.openai.AsyncOpenAI",
        return_value=mock_client,
    ):
        adapter = OpenAIClientAdapter(
            api_key="k",
            timeout_seconds=30,
            rasterizer=rasterizer,
            render_dpi=100,
            max_pages=2,
        )
    return adapter, rasterizer


def _generate(adapter: OpenAIClientAdapter, json_schema: dict[str, object] | None) -> str:
    return asyncio.run(
        adapter.generate(
            model="m",
            temperature=0.1,
            prompt="prompt",
            pdf_bytes=b"%PDF",
            json_schema=json_schema,
        )
    )


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        create = AsyncMock(return_value=_make_mock_response('{"ok": true}'))
        adapter, _rasterizer = _make_adapter(create)
        assert _generate(adapter, {"type": "object"}) == '{"ok": true}'

    def test_sends_rendered_pages_as_images(self) -> None:
        create = AsyncMock(return_value=_make_mock_response("workOrder"))
        adapter, rasterizer = _make_adapter(create, pages=[b"one", b"two"])
        _generate(adapter, None)

        rasterizer.render.assert_called_once_with(b"%PDF", dpi=100, max_pages=2)
        content = create.call_args.kwargs["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": "prompt"}
        assert [part["type"] for part in content[1:]] == ["image_url", "image_url"]
        assert content[1]["image_url"]["url"] == "data:image/png;base64,b25l"

    def test_plain_text_request_has_no_response_format(self) -> None:
        create = AsyncMock(return_value=_make_mock_response("workOrder"))
        adapter, _rasterizer = _make_adapter(create)
        _generate(adapter, None)
        assert "response_format" not in create.call_args.kwargs

    def test_schema_request_is_strict(self) -> None:
        create = AsyncMock(return_value=_make_mock_response("{}"))
        adapter, _rasterizer = _make_adapter(create)
        schema: dict[str, object] = {"type": "object", "properties": {}}
        _generate(adapter, schema)

        response_format = create.call_args.kwargs["response_format"]
        assert response_format["type"] == "json_schema"
        assert response_format["json_schema"]["strict"] is True
        assert response_format["json_schema"]["schema"]["additionalProperties"] is False
        assert "additionalProperties" not in schema

    def test_raises_error_for_empty_content(self) -> None:
        create = AsyncMock(return_value=_make_mock_response(None))
        adapter, _rasterizer = _make_adapter(create)
        with pytest.raises(ExtractionError, match="empty response"):
            _generate(adapter, {"type": "object"})

    def test_raises_error_for_no_choices(self) -> None:
        response = MagicMock()
        response.choices = []
        adapter, _rasterizer = _make_adapter(AsyncMock(return_value=response))
        with pytest.raises(ExtractionError, match="no choices"):
            _generate(adapter, None)

    def test_raises_network_error_on_connection_failure(self) -> None:
        create = AsyncMock(side_effect=openai.APIConnectionError(request=MagicMock()))
        adapter, _rasterizer = _make_adapter(create)
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _generate(adapter, None)

    def test_raises_network_error_on_timeout(self) -> None:
        create = AsyncMock(side_effect=httpx.TimeoutException("timeout"))
        adapter, _rasterizer = _make_adapter(create)
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _generate(adapter, None)

    def test_raises_network_error_on_dropped_connection(self) -> None:
        create = AsyncMock(side_effect=httpx.ReadError("connection reset by peer"))
        adapter, _rasterizer = _make_adapter(create)
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _generate(adapter, None)

    def test_raises_network_error_on_api_error(self) -> None:
        create = AsyncMock(
            side_effect=openai.APIError(message="server error", request=MagicMock(), body=None)
        )
        adapter, _rasterizer = _make_adapter(create)
        with pytest.raises(ExtractionNetworkError, match="API error"):
            _generate(adapter, None)
