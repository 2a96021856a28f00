"""SDK configuration.

Why here:
- Centralizes environment variables (pydantic-settings) so the client, the
  query builders and the CLI all read the same typed contract.
- The CLI `setup` command persists values into the per-user `.env`.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kontent_delivery.core.domain.models import LinkResolver, TypeResolver
from kontent_delivery.core.interfaces.html_parser import RichTextHtmlParser
from kontent_delivery.core.services.rich_text.context import ImageResolver


DEFAULT_BASE_URL = "https://deliver.kenticocloud.com"
DEFAULT_PREVIEW_BASE_URL = "https://preview-deliver.kenticocloud.com"
APP_DIR_NAME = "kontent-delivery"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (APPDATA, Application Support or XDG)."""

    home = Path.home()
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or home) / APP_DIR_NAME
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_DIR_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config") / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _read_env_file(env_path: Path) -> dict[str, str]:
    """`KEY=value` pairs of a dotenv file, in file order; comments are dropped."""

    if not env_path.is_file():
        return {}

    pairs: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if sep and key.strip():
            pairs[key.strip()] = value.strip().strip("\"'")
    return pairs


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Merge `values` into the per-user `.env` (or `env_path`).

    Existing keys keep their position; new keys are appended. `None`
    values leave the current entry untouched.
    """

    target = env_path or get_user_env_file()
    merged = _read_env_file(target)
    for key, value in values.items():
        if value is not None:
            merged[key] = value

    body = "".join(f"{key}={value}\n" for key, value in merged.items())
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"# {APP_DIR_NAME} user config\n{body}", encoding="utf-8")
    return target


class DeliverySettings(BaseSettings):
    """Scalar options of a delivery client.

    Callables (type resolvers, link resolvers) are not settings; they are
    passed to `DeliveryClient` directly.
    """

    model_config = SettingsConfigDict(
        env_prefix="KONTENT_DELIVERY_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the per-user config written by `setup`.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    project_id: str = Field(
        default="",
        description="Identifier of the project whose content is delivered.",
    )
    preview_api_key: str | None = Field(
        default=None,
        description="API key used when preview mode is enabled.",
    )
    secured_api_key: str | None = Field(
        default=None,
        description="API key used when secured mode is enabled.",
    )
    enable_preview_mode: bool = Field(
        default=False,
        description="Query the preview endpoint (unpublished content).",
    )
    enable_secured_mode: bool = Field(
        default=False,
        description="Send the secured API key with every request.",
    )
    default_language: str | None = Field(
        default=None,
        description="Language codename applied to item queries without an explicit language.",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL of the production Delivery API.",
    )
    preview_base_url: str = Field(
        default=DEFAULT_PREVIEW_BASE_URL,
        min_length=8,
        description="Base URL of the preview Delivery API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries on transport errors and 5xx responses.",
    )
    retry_delay_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Delay before the first retry; doubles on each further attempt.",
    )
    user_agent: str = Field(
        default="kontent-delivery-python/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    enable_advanced_logging: bool = Field(
        default=False,
        description="Log non-fatal resolution issues (missing items, resolvers, links).",
    )

    @model_validator(mode="after")
    def _check_modes(self) -> "DeliverySettings":
        if self.enable_preview_mode and not self.preview_api_key:
            raise ValueError("preview_api_key is required when preview mode is enabled")
        if self.enable_secured_mode and not self.secured_api_key:
            raise ValueError("secured_api_key is required when secured mode is enabled")
        return self


@dataclass(frozen=True)
class DeliveryClientConfig:
    """Everything a client needs: scalar settings plus the user callbacks.

    `type_resolvers` are looked up first-match in registration order.
    `transport` is handed to `httpx.AsyncClient` (mock transports, proxies).
    """

    settings: DeliverySettings = field(default_factory=DeliverySettings)
    type_resolvers: Sequence[TypeResolver] = ()
    link_resolver: LinkResolver | None = None
    image_resolver: ImageResolver | None = None
    html_parser: RichTextHtmlParser | None = None
    transport: Any = None
