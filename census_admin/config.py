from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "CENSUS_", "env_file": ".env", "env_file_encoding": "utf-8"}

    api_base_url: str = Field(default="http://localhost:5000")
    api_timeout: float = Field(default=30.0, gt=0)
    session_secret: str = Field(min_length=32)
    session_expire_minutes: int = Field(default=480, gt=0)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    db_path: str = Field(default="census_admin.db")
    cors_origins: str = Field(default="http://localhost:3000")

    # Import pipeline
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    csv_parser: str = Field(default="naive", pattern=r"^(naive|quoted)$")

    # Records / analytics
    records_page_size: int = Field(default=10, gt=0)
    analytics_record_limit: int = Field(default=1000, gt=0)


settings = Settings()
