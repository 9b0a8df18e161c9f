from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.documents.models import DocumentType


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    ai_provider: str = "gemini"

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.5-flash"
    gemini_timeout_seconds: int = 60

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 60
    openai_temperature: float = 0.0

    openai_compatible_base_url: str = ""
    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_timeout_seconds: int = 60

    pdf_engine: str = "pymupdf"
    pdf_render_dpi: int = Field(default=150, gt=0)
    pdf_max_pages: int = Field(default=4, gt=0)

    pacing_delay_ms: int = Field(default=200, ge=0)
    max_concurrent_retries: int = Field(default=4, gt=0)

    link_base_url_work_order: str = ""
    link_base_url_supply_request: str = ""
    link_base_url_uninstallation: str = ""
    link_base_url_installation: str = ""

    output_dir: Path = Path("output")

    def link_base_urls(self) -> dict[DocumentType, str]:
        """Hyperlink base URL per document type, used by the spreadsheet export."""
        return {
            DocumentType.WORK_ORDER: self.link_base_url_work_order,
            DocumentType.SUPPLY_REQUEST: self.link_base_url_supply_request,
            DocumentType.UNINSTALLATION: self.link_base_url_uninstallation,
            DocumentType.INSTALLATION: self.link_base_url_installation,
        }
