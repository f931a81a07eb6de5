from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORE_FILE = "omniStore"


class Settings(BaseSettings):
    """Runtime configuration for the store.

    Values are loaded from ``OMNISTORE_*`` environment variables by default
    and may be overridden via CLI flags by the application entrypoint.
    """

    # Backing file, relative to the working directory unless absolute.
    store_path: Path = Path(DEFAULT_STORE_FILE)

    # Write to a temp file and rename over the store instead of truncating
    # in place. The on-disk format is identical either way.
    atomic_writes: bool = True

    # How long a command waits for the initial load. None blocks forever.
    ready_timeout_s: PositiveFloat | None = None

    # Console adapter prints the scratch value after each loaddata.
    echo_loads: bool = True

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="OMNISTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
