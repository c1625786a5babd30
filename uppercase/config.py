from pydantic import field_validator
from pydantic_settings import BaseSettings

from .domain.http import ResponseFormat
from .infrastructure.logging import LogLevel, check_log_level


class Settings(BaseSettings):
    """Function settings loaded from environment."""

    # Service
    service_name: str = "uppercase"
    log_level: LogLevel = "INFO"

    # Response body: uppercased text as-is, or {"result": ...} JSON
    response_format: ResponseFormat = ResponseFormat.RAW

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return check_log_level(v)

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
