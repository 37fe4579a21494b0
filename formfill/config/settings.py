from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    form_family: str = "individual_income"
    form_family_path: Path | None = None

    templates_dir: Path | None = None

    template_id: str = "tmpl_1040_2024_v1"
    data_path: Path | None = None
