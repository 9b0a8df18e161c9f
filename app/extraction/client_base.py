from abc import ABC, abstractmethod


class BaseVisionClient(ABC):
    """Contract for provider-specific multimodal AI clients."""

    @abstractmethod
    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        pdf_bytes: bytes,
        json_schema: dict[str, object] | None,
    ) -> str:
        """Send the prompt together with the PDF and return the reply as plain text.

        When `json_schema` is given the provider is asked for JSON output
        conforming to it; otherwise free text is expected.

        Raises:
            ExtractionNetworkError: on transport or provider API failures.
            ExtractionError: when the provider returns no usable content.
        """
