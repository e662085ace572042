"""Re-exports all Pydantic models."""

from lingvoblog.models.ping import PingResult, PingStatus
from lingvoblog.models.post import REQUIRED_POST_FIELDS, Category, Language, Post, PostCreate
from lingvoblog.models.site import SiteSettings

__all__ = [
    "REQUIRED_POST_FIELDS",
    "Category",
    "Language",
    "PingResult",
    "PingStatus",
    "Post",
    "PostCreate",
    "SiteSettings",
]
