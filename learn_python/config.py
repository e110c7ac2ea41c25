from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    app_name: str = Field(default="learn-python", alias="APP_NAME")
    app_version: str = Field(default="0.0.1", alias="APP_VERSION")
    app_description: str = Field(
        default="A simple Python microservice for learning and demonstration",
        alias="APP_DESCRIPTION",
    )
    environment: str = Field(default="development", alias="APP_ENV")
    build_date: str = Field(default="unknown", alias="BUILD_DATE")
    commit: str = Field(default="unknown", alias="VCS_REF")
    repository_url: str = Field(default="https://github.com/dxas90/learn-python", alias="REPOSITORY_URL")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    system_probe_timeout: float = Field(default=1.0, alias="SYSTEM_PROBE_TIMEOUT", gt=0)
    shutdown_grace_seconds: int = Field(default=10, alias="SHUTDOWN_GRACE_SECONDS", ge=0)

    otel_endpoint: str = Field(default="", alias="OTEL_EXPORTER_OTLP_ENDPOINT")
    otel_service_name: str = Field(default="learn-python", alias="OTEL_SERVICE_NAME")

    @property
    def tracing_enabled(self) -> bool:
        return bool(self.otel_endpoint.strip())

    @property
    def bind_address(self) -> str:
        return f"{self.host}:{self.port}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
