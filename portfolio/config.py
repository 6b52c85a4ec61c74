from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Ahmed Komsan"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Filesystem layout
    content_dir: Path = PROJECT_ROOT / "content"
    output_dir: Path = PROJECT_ROOT / "public"
    static_dir: Path = Path(__file__).resolve().parent / "static"
    plugins_config_file: Path = Path("data/plugins_config.json")
    show_drafts: bool = False

    # Contact form
    contact_form_endpoint: str = "https://getform.io/f/5622bb20-13a9-4932-93d5-ec747d540a6b"
    contact_relay_enabled: bool = False
    contact_timeout_seconds: float = 10.0

    # Third-party embeds
    ga_tracking_id: str = "komsan_test_id"
    disqus_script: str = "https://ahmedkomsan.disqus.com/embed.js"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("contact_form_endpoint", "ga_tracking_id", "disqus_script", mode="before")
    @classmethod
    def blank_uses_default(cls, value, info: ValidationInfo):
        # An empty variable falls back like an unset one
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
