from pathlib import Path
from typing import Optional

from ape.api import PluginConfig
from pydantic import Field
from pydantic_settings import SettingsConfigDict


class SafeLookupConfig(PluginConfig):
    api_key: Optional[str] = None
    """Safe Transaction Service API key, sent as a bearer token."""

    max_retries: int = Field(default=3, ge=1)
    """Attempts per request before giving up on a network."""

    retry_delay: float = Field(default=0.5, ge=0)
    """Seconds to wait between attempts."""

    request_timeout: int = Field(default=10, gt=0)

    address_book: Optional[Path] = None
    """A ``.json`` or ``.csv`` address book to use instead of the bundled one."""

    model_config = SettingsConfigDict(env_prefix="SAFE_", env_file=".env", extra="ignore")
