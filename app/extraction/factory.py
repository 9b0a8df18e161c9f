from dataclasses import dataclass
from typing import ClassVar

from app.config.settings import Settings
from app.documents.models import DocumentType
from app.extraction.base import BaseDocumentClassifier, BaseFieldExtractor
from app.extraction.classifier import AiDocumentClassifier
from app.extraction.client_base import BaseVisionClient
from app.extraction.example_client_adapter import ExampleClientAdapter
from app.extraction.extractor import AiFieldExtractor
from app.extraction.gemini_client_adapter import GeminiClientAdapter
from app.extraction.openai_client_adapter import OpenAIClientAdapter
from app.pdf.factory import PdfRasterizerFactory


@dataclass(frozen=True)
class ExtractionServices:
    """The classifier plus one field extractor per document type."""

    classifier: BaseDocumentClassifier
    extractors: dict[DocumentType, BaseFieldExtractor]


class ExtractionFactory:
    """Creates the classifier and extractors for the configured AI provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> ExtractionServices:
        """Create classifier and extractors from application settings."""
        provider = settings.ai_provider.lower()
        client = cls._create_client(provider, settings)
        model = cls._resolve_model_name(provider, settings)
        temperature = settings.openai_temperature if provider == "openai" else 0.0
        return ExtractionServices(
            classifier=AiDocumentClassifier(client=client, model=model),
            extractors={
                document_type: AiFieldExtractor(
                    client=client,
                    model=model,
                    document_type=document_type,
                    temperature=temperature,
                )
                for document_type in DocumentType
            },
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseVisionClient:
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=settings.gemini_api_key,
                timeout_seconds=settings.gemini_timeout_seconds,
            )
        base_url = cls._resolve_base_url(provider, settings)
        if provider == "openai":
            api_key = settings.openai_api_key
            timeout_seconds = settings.openai_timeout_seconds
        else:
            api_key = settings.openai_compatible_api_key
            timeout_seconds = settings.openai_compatible_timeout_seconds
        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=timeout_seconds,
            rasterizer=PdfRasterizerFactory.create(settings),
            render_dpi=settings.pdf_render_dpi,
            max_pages=settings.pdf_max_pages,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "ai_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.openai_compatible_base_url.strip() or default_base_url
        supported = [
            "example",
            "gemini",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown AI provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        if provider == "example":
            return "example"
        if provider == "gemini":
            return settings.gemini_model_name
        if provider == "openai":
            return settings.openai_model_name
        return settings.openai_compatible_model_name
