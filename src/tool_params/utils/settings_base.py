from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseSettings(BaseModel):
    """
    Root model for tool-params configuration sections.
    Unknown keys in a YAML file are rejected instead of silently ignored.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
