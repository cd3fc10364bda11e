"""Runtime settings loaded once from the environment."""

import os
import re
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


DEFAULT_VISION_MODEL = "anthropic/claude-3.5-sonnet"
DEFAULT_TEXT_MODEL = "anthropic/claude-3.5-sonnet"
DEFAULT_DB_HOST = "aws-0-us-east-1.pooler.supabase.com"
DEFAULT_DB_PORT = 6543


class ConfigError(Exception):
    """Raised when a required setting is missing or invalid."""

    pass


class Settings(BaseModel):
    """Explicit configuration passed to every component that talks to a service."""

    backend: Literal["supabase", "local"] = Field(
        default="supabase",
        description="Where images and catalog records live",
    )
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_service_role_key: str = Field(default="", description="Supabase service role key")
    supabase_db_password: str = Field(
        default="",
        description="Postgres password, only needed by init-db to apply schema.sql",
    )
    supabase_db_host: str = Field(default=DEFAULT_DB_HOST, description="Supabase connection pooler host")
    supabase_db_port: int = Field(default=DEFAULT_DB_PORT)
    storage_bucket: str = Field(default="nihonto-images")
    openrouter_api_key: str = Field(default="", description="OpenRouter API key")
    vision_model: str = Field(default=DEFAULT_VISION_MODEL)
    text_model: str = Field(default=DEFAULT_TEXT_MODEL)
    data_dir: Path = Field(default=Path("data"), description="Root for local backend and registry")

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("supabase_service_role_key", "openrouter_api_key", "supabase_db_password")
    @classmethod
    def strip_secret(cls, v: str) -> str:
        return v.strip()

    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return Path(v).expanduser()

    model_config = {
        "frozen": True,
    }

    @property
    def sqlite_path(self) -> Path:
        return self.data_dir / "catalog.db"

    @property
    def assets_root(self) -> Path:
        return self.data_dir / "assets"

    def require_storage(self) -> None:
        """Fail unless the catalog and asset store can be reached."""
        if self.backend != "supabase":
            return
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", self.supabase_url),
                ("SUPABASE_SERVICE_ROLE_KEY", self.supabase_service_role_key),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing environment variables: {', '.join(missing)}")

        parsed = urlparse(self.supabase_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(f"SUPABASE_URL must be an http(s) URL, got {self.supabase_url!r}")

    @property
    def supabase_project_ref(self) -> str:
        """Project ref from an https://<ref>.supabase.co URL."""
        match = re.match(r"https://([^./]+)\.supabase\.co", self.supabase_url)
        if not match:
            raise ConfigError(f"Cannot derive project ref from SUPABASE_URL {self.supabase_url!r}")
        return match.group(1)

    def require_database(self) -> None:
        """Fail unless a direct Postgres connection can be made."""
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", self.supabase_url),
                ("SUPABASE_DB_PASSWORD", self.supabase_db_password),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing environment variables: {', '.join(missing)}")

    def require_completion(self) -> None:
        """Fail unless the completion service key is present."""
        if not self.openrouter_api_key:
            raise ConfigError(
                "Missing environment variables: OPENROUTER_API_KEY. "
                "Get your key at: https://openrouter.ai/keys"
            )


def load_settings(env_file: str | None = None) -> Settings:
    """Build settings from the process environment (and an optional .env file)."""
    load_dotenv(env_file)

    try:
        return Settings(
            backend=os.getenv("NIHONTO_BACKEND", "supabase").strip().lower(),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""),
            supabase_db_password=os.getenv("SUPABASE_DB_PASSWORD", ""),
            supabase_db_host=os.getenv("SUPABASE_DB_HOST", DEFAULT_DB_HOST),
            supabase_db_port=os.getenv("SUPABASE_DB_PORT", str(DEFAULT_DB_PORT)),
            storage_bucket=os.getenv("NIHONTO_STORAGE_BUCKET", "nihonto-images"),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            vision_model=os.getenv("NIHONTO_VISION_MODEL", DEFAULT_VISION_MODEL),
            text_model=os.getenv("NIHONTO_TEXT_MODEL", DEFAULT_TEXT_MODEL),
            data_dir=Path(os.getenv("NIHONTO_DATA_DIR", "data")),
        )
    except ValueError as e:
        # pydantic.ValidationError subclasses ValueError
        raise ConfigError(f"Invalid configuration: {e}") from e
