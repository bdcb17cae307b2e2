"""
Settings for tool-params, loaded from YAML through :class:`ConfigLoader`.

The bundled ``config/default.yaml`` provides defaults; ``TOOL_PARAMS_CONFIG``
points at a replacement file and ``TOOL_PARAMS_ENV`` selects an overlay
(``config/<env>.yaml``).
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator

from tool_params.logging import configure_logging
from tool_params.utils import BaseSettings, ConfigLoader
from tool_params.validation.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

CONFIG_DIR = Path(__file__).resolve().parent / "config"
ENV_SELECTOR_VAR = "TOOL_PARAMS_ENV"


class ServiceSettings(BaseSettings):
    name: str = Field(default="tool-params", min_length=1)


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"logging.level must be one of {sorted(valid_levels)}")
        return v_upper


class PaginationSettings(BaseSettings):
    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    max_page_size: int = Field(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @model_validator(mode="after")
    def check_default_within_max(self) -> PaginationSettings:
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"pagination.default_page_size ({self.default_page_size}) "
                f"exceeds pagination.max_page_size ({self.max_page_size})"
            )
        return self


class ToolParamsSettings(BaseSettings):
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)


def load_settings(
    config_dir: str | Path = CONFIG_DIR,
    env: str | None = None,
    cli_config_path: str | None = None,
) -> ToolParamsSettings:
    """Load and validate settings from ``config_dir`` (bundled defaults if omitted)."""
    return ConfigLoader(config_dir).load(
        schema=ToolParamsSettings,
        env=env if env is not None else os.getenv(ENV_SELECTOR_VAR),
        cli_config_path=cli_config_path,
    )


@lru_cache
def get_settings() -> ToolParamsSettings:
    """Get cached settings instance"""
    return load_settings()


def configure_logging_from_settings(settings: ToolParamsSettings | None = None) -> None:
    """Configure process logging from the ``service`` and ``logging`` sections."""
    settings = settings or get_settings()
    configure_logging(settings.service.name, settings.logging.level)
