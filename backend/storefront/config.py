import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, ValidationError, field_validator

DEFAULT_LEGACY_IMAGE_HOSTS = [
    "pub-46371bda6faf4910b74631159fc2dfd4.r2.dev",
    "pub-8ea0502158a94b8ca8a7abb9e18a57e8.r2.dev",
    "pub-140b3d87a1b64af6a3193ba8aa685e26.r2.dev",
]


class Settings(BaseModel):
    supabase_url: HttpUrl = Field(alias="SUPABASE_URL")
    supabase_key: str = Field(alias="SUPABASE_SERVICE_KEY")
    env: str = Field(default="local", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # catalog
    products_table: str = Field(default="products", alias="CATALOG_PRODUCTS_TABLE")
    cdn_base_url: str = Field(default="https://cdn.kctmenswear.com", alias="CATALOG_CDN_BASE_URL")
    legacy_image_hosts: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LEGACY_IMAGE_HOSTS),
        alias="CATALOG_LEGACY_IMAGE_HOSTS",
    )
    cache_ttl_seconds: float = Field(default=30.0, gt=0, lt=60, alias="CATALOG_CACHE_TTL_SECONDS")
    default_page_size: int = Field(default=24, ge=1, alias="CATALOG_DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, ge=1, alias="CATALOG_MAX_PAGE_SIZE")

    @field_validator("legacy_image_hosts", mode="before")
    @classmethod
    def _split_hosts(cls, value):
        # Env vars arrive as "host-a,host-b"
        if isinstance(value, str):
            return [h.strip() for h in value.split(",") if h.strip()]
        return value

    @field_validator("cdn_base_url")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _load_dotenv():
    # Load from repo root if present, otherwise rely on environment variables.
    root_env = Path(__file__).resolve().parents[2] / ".env"
    if root_env.exists():
        load_dotenv(root_env)
    else:
        load_dotenv()


@lru_cache()
def get_settings() -> Settings:
    _load_dotenv()
    try:
        return Settings(**os.environ)
    except ValidationError as exc:
        missing = [e["loc"][0] for e in exc.errors() if e["type"] == "missing"]
        if not missing:
            raise RuntimeError(f"Invalid configuration: {exc}") from exc
        detail = f"Missing required environment variables: {', '.join(missing)}"
        raise RuntimeError(detail) from exc
