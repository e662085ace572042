"""Site-wide settings read from the ``site_settings`` table."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator


class SiteSettings(BaseModel):
    """Flat key -> string mapping. Declared keys default to an empty string."""

    model_config = ConfigDict(frozen=True, extra="allow")

    instagram_url: str = ""
    telegram_url: str = ""
    youtube_url: str = ""
    facebook_url: str = ""
    twitter_url: str = ""
    linkedin_url: str = ""
    ga4_measurement_id: str = ""
    gtm_container_id: str = ""
    meta_pixel_id: str = ""

    SOCIAL_KEYS: ClassVar[tuple[str, ...]] = (
        "instagram_url",
        "telegram_url",
        "youtube_url",
        "facebook_url",
        "twitter_url",
        "linkedin_url",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @classmethod
    def from_rows(cls, rows: list[tuple[str, str | None]]) -> SiteSettings:
        return cls.model_validate({key: value or "" for key, value in rows})

    def social_links(self) -> list[str]:
        """Configured profile URLs, in a fixed order."""
        return [url for key in self.SOCIAL_KEYS if (url := getattr(self, key))]

    def get(self, key: str, default: str = "") -> str:
        value = getattr(self, key, None)
        return default if value is None else str(value)
