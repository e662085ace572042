"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from pydantic_settings import BaseSettings, SettingsConfigDict

LANGUAGES: tuple[str, ...] = ("uz", "ru", "en")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (empty -> SQLite file inside data_dir)
    database_url: str = ""
    data_dir: Path = Path("./data")

    # Site identity
    site_url: str = "https://shohruxdigital.uz"
    site_name: str = "ShohruxDigital"
    author_name: str = "Shohruxbek Foziljonov"
    twitter_handle: str = "@F_Shohruxbek"
    # Publisher logo in Article structured data (empty -> site favicon)
    logo_url: str = ""
    # Public base URL of the functions endpoints, used in robots.txt and llms.txt
    functions_url: str = ""

    # create-post API key (empty -> every request is rejected)
    create_post_api_key: str = ""

    # IndexNow
    indexnow_key: str = "shohruxdigital2024key"

    # SMTP (reply-message)
    smtp_host: str = "mail.shohruxdigital.uz"
    smtp_port: int = 465
    smtp_username: str = "shohruxbek@shohruxdigital.uz"
    smtp_password: str = ""
    mail_from_name: str = "Shohrux Blog"

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @property
    def site_host(self) -> str:
        return urlsplit(self.site_url).netloc

    @property
    def functions_base_url(self) -> str:
        return (self.functions_url or f"{self.site_url}/functions/v1").rstrip("/")

    @property
    def publisher_logo(self) -> str:
        return self.logo_url or f"{self.site_url}/favicon.ico"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "lingvoblog.db"

    @property
    def db_url(self) -> str:
        return self.database_url or f"sqlite:///{self.db_path}"

    def ensure_data_dir(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
