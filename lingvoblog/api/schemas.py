"""API request/response schemas (separate from domain models)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from lingvoblog.models.ping import PingResult

# --- Responses ---


class CreatedPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    published: bool
    url: str


class CreatePostResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str = "Post created successfully"
    post: CreatedPost


class PingResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool = True
    results: list[PingResult]
    submitted_urls: list[str] = Field(serialization_alias="submittedUrls")
    message: str = "URLs submitted to search engines for indexing"


class ReplyResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str = "Reply sent successfully"


class HealthResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    version: str
    db_connected: bool


class ConfigCheckResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    configured: dict[str, bool]


# --- Requests ---


class PingRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str | None = None
    urls: list[str] | None = None

    def targets(self) -> list[str]:
        """``urls`` when given, otherwise the single ``url``."""
        if self.urls is not None:
            return list(self.urls)
        return [self.url] if self.url else []


class ReplyRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: str
    to_name: str = Field(default="", alias="toName")
    subject: str
    message: str
    original_message: str = Field(default="", alias="originalMessage")
