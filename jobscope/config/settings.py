from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    max_document_bytes: int = 2 * 1024 * 1024
    min_text_length: int = 50
    max_normalized_length: int = 40_000
    max_json_chars: int = 100_000

    analysis_provider: str = "openai"
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_base_url: str | None = None
    openai_timeout_seconds: int = 30
    openai_max_retries: int = 3
    openai_temperature: float = 0.0
    analysis_cache_ttl_seconds: int = 3600
    max_resume_prompt_chars: int = 15_000

    storage_backend: str = "file"
    storage_path: Path = Path.home() / ".jobscope" / "storage.json"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "jobscope"
    db_username: str = "jobscope"
    db_password: str = "secret"

    extension_id: str = "jobscope"
    user_agent: str = ""
    kdf_iterations: int = 100_000
    vault_max_secret_length: int = 1_000_000
