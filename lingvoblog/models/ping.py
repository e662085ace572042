"""Search-engine ping results."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class PingStatus(StrEnum):
    SUCCESS = "success"
    FAILED = "failed"


class PingResult(BaseModel):
    """Outcome of one notification to one search engine. Never persisted."""

    model_config = ConfigDict(frozen=True)

    engine: str
    status: PingStatus
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == PingStatus.SUCCESS
