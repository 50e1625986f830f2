from __future__ import annotations

import os
from enum import Enum
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    LOCAL = "local"
    DEV = "dev"
    PROD = "prod"


class AppSettings(BaseModel):
    name: str = Field(default="devops-practice-app")
    env: AppEnv = Field(default=AppEnv.DEV)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not (1 <= value <= 65535):
            raise ValueError("APP_PORT must be between 1 and 65535")
        return value


class OTELSettings(BaseModel):
    enabled: bool = False
    service_name: str = Field(default="devops-practice-app")
    exporter_otlp_endpoint: str = Field(default="http://localhost:4317")
    exporter_otlp_protocol: Literal["grpc", "http/protobuf"] = Field(
        default="grpc"
    )


class MetricsSettings(BaseModel):
    enabled: bool = True


def _as_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or str(raw).strip() == "":
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseSettings):
    """
    Process settings loaded from environment.

    Only the hosting surface reads these (bind address, logging, tracing,
    metrics). The HTTP handlers themselves return fixed values.

    Priority:
      1. DEVOPS_APP_* variables (namespaced)
      2. Legacy APP_* / LOG_LEVEL / OTEL_* where appropriate
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVOPS_APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: Optional[str] = None
    app_env: Optional[str] = None
    app_host: Optional[str] = None
    app_port: Optional[int] = None
    log_level: Optional[str] = None

    # OTEL
    otel_enabled: Optional[str] = None
    otel_service_name: Optional[str] = None
    otel_exporter_otlp_endpoint: Optional[str] = None
    otel_exporter_otlp_protocol: Optional[str] = None

    # Metrics
    metrics_enabled: Optional[str] = None

    @property
    def app(self) -> AppSettings:
        name = self.app_name or self._get_legacy("APP_NAME") or AppSettings().name
        env_str = self.app_env or self._get_legacy("APP_ENV") or AppSettings().env
        host = self.app_host or self._get_legacy("APP_HOST") or AppSettings().host
        port = (
            self.app_port
            if self.app_port is not None
            else int(self._get_legacy("APP_PORT", str(AppSettings().port)))
        )
        log_level = (
            self.log_level or self._get_legacy("LOG_LEVEL") or AppSettings().log_level
        )

        return AppSettings(
            name=name,
            env=AppEnv(env_str),
            host=host,
            port=port,
            log_level=log_level.upper(),  # validated by AppSettings
        )

    @property
    def otel(self) -> OTELSettings:
        enabled = _as_bool(
            self.otel_enabled or self._get_legacy("OTEL_ENABLED"),
            OTELSettings().enabled,
        )
        service_name = (
            self.otel_service_name
            or self._get_legacy("OTEL_SERVICE_NAME")
            or OTELSettings().service_name
        )
        endpoint = (
            self.otel_exporter_otlp_endpoint
            or self._get_legacy("OTEL_EXPORTER_OTLP_ENDPOINT")
            or OTELSettings().exporter_otlp_endpoint
        )
        protocol = (
            self.otel_exporter_otlp_protocol
            or self._get_legacy("OTEL_EXPORTER_OTLP_PROTOCOL")
            or OTELSettings().exporter_otlp_protocol
        )

        return OTELSettings(
            enabled=enabled,
            service_name=service_name,
            exporter_otlp_endpoint=endpoint,
            exporter_otlp_protocol=protocol,
        )

    @property
    def metrics(self) -> MetricsSettings:
        return MetricsSettings(
            enabled=_as_bool(self.metrics_enabled, MetricsSettings().enabled)
        )

    # Helpers

    @staticmethod
    def _get_legacy(name: str, default: Optional[str] = None) -> Optional[str]:
        """Read legacy env vars (APP_*, OTEL_*) directly if needed."""
        return os.getenv(name, default)


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance to avoid re-parsing env on every import.

    Usage:
        from backend.devops_practice_app.core.config import get_settings
        settings = get_settings()
        settings.app.name, settings.app.port, ...
    """
    return Settings()


settings = get_settings()
