from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    container_format: str = "docx"
    max_template_size_bytes: int = 10 * 1024 * 1024

    substitution_mode: str = "all"

    archive_compression_level: int = 6
    file_name_max_length: int = 30
    file_name_prefix: str = "قرارداد"
    file_name_fallback: str = "نامشخص"
    file_name_field: str = "owner_full_name"

    template_path: str = ""
    records_path: str = ""
    output_dir: str = "."
