from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    default_model: str = "gemini/gemini-2.5-flash"
    ocr_model: str = "gemini/gemini-2.5-flash"

    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_seconds: int = 60

    openai_api_key: str = ""
    openai_timeout_seconds: int = 60
    openai_temperature: float | None = None

    openrouter_api_key: str = ""
    groq_api_key: str = ""
    together_api_key: str = ""
    deepseek_api_key: str = ""
    example_api_key: str = ""

    credentials_path: Path | None = Path.home() / ".docreview" / "credentials.json"

    pdf_engine: str = "pymupdf"
    pdf_render_scale: float = 2.0

    def provider_api_keys(self) -> dict[str, str]:
        """Environment-provided credential defaults keyed by provider name."""
        return {
            "gemini": self.gemini_api_key,
            "openai": self.openai_api_key,
            "openrouter": self.openrouter_api_key,
            "groq": self.groq_api_key,
            "together": self.together_api_key,
            "deepseek": self.deepseek_api_key,
            "example": self.example_api_key,
        }
