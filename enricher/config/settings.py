from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    max_upload_files: int = 3
    max_pdf_size_bytes: int = 100 * 1024 * 1024

    batch_parallelism: int = 3

    web_fetch_provider: str = "scraper"
    web_fetch_endpoint: str = "http://localhost:5000/api/search/web-content"
    web_fetch_timeout_seconds: int = 30
    web_max_content_chars: int = 50_000

    extraction_provider: str = "http"
    extraction_endpoint: str = "http://localhost:5000/api/search/pdf-extract"
    extraction_timeout_seconds: int = 120
    extraction_search_method: str = "pdf"

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4.1-mini"
    openai_compatible_base_url: str = ""
    openai_temperature: float = 0.0

    properties_file: str = ""
