from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AttackSummary(BaseModel):
    attack_id: str
    status: str
    source_ip: str | None = None
    rules: list[str] = Field(default_factory=list)
    probes: int = Field(default=0, ge=0)
    start_time: datetime | None = None
    end_time: datetime | None = None

    model_config = ConfigDict(extra="forbid")


class VulnerabilitySummary(BaseModel):
    vuln_id: str
    title: str
    type: str
    severity: str
    status: str
    environments: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    last_seen_at: datetime | None = None

    model_config = ConfigDict(extra="forbid")


class ApplicationSummary(BaseModel):
    app_id: str
    name: str
    status: str | None = None
    language: str | None = None
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")
