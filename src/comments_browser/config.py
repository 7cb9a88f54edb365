"""Runtime settings for the comments browser.

Every knob is an environment variable, optionally loaded from a ``.env``
file. Unset or blank variables keep the ``ClientConfig`` default.
``COMMENTS_API_BASE_URL_<ENV>`` overrides the base URL for the profile named
by ``COMMENTS_ENV``.
"""

from __future__ import annotations

import os
from dataclasses import MISSING, dataclass
from typing import Any, Callable

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_PAGE_SIZE = 5


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 0
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(raw)


@dataclass(frozen=True)
class _Setting:
    attr: str
    env: str
    cast: Callable[[str], Any]
    kind: str
    check: Callable[[Any], bool] = lambda value: True
    rule: str = ""

    def read(self) -> Any:
        raw = os.getenv(self.env)
        if raw is None or not raw.strip():
            return MISSING
        try:
            value = self.cast(raw.strip())
        except ValueError as exc:
            raise ConfigError(f"Invalid {self.env}: expected {self.kind}, got {raw!r}") from exc
        if not self.check(value):
            raise ConfigError(f"Invalid {self.env}: expected {self.rule}, got {value}")
        return value


# Knobs read by HttpClient (transport) and FetchCoordinator (page size).
_SETTINGS = (
    _Setting("connect_timeout_seconds", "COMMENTS_CONNECT_TIMEOUT_SECONDS", float, "a number", lambda v: v > 0, "> 0"),
    _Setting("read_timeout_seconds", "COMMENTS_READ_TIMEOUT_SECONDS", float, "a number", lambda v: v > 0, "> 0"),
    _Setting("retries", "COMMENTS_RETRIES", int, "an integer", lambda v: v >= 0, ">= 0"),
    _Setting("retry_backoff_seconds", "COMMENTS_RETRY_BACKOFF_SECONDS", float, "a number", lambda v: v >= 0, ">= 0"),
    _Setting("max_connections", "COMMENTS_MAX_CONNECTIONS", int, "an integer", lambda v: v >= 1, ">= 1"),
    _Setting("verify_ssl", "COMMENTS_VERIFY_SSL", _parse_bool, "a boolean"),
    _Setting("page_size", "COMMENTS_PAGE_SIZE", int, "an integer", lambda v: v >= 1, ">= 1"),
)


def _base_url(env_name: str) -> str:
    url = (
        (os.getenv(f"COMMENTS_API_BASE_URL_{env_name.upper()}") or "").strip()
        or (os.getenv("COMMENTS_API_BASE_URL") or "").strip()
        or DEFAULT_API_BASE_URL
    )
    if not url.startswith(("http://", "https://")):
        raise ConfigError(f"Invalid COMMENTS_API_BASE_URL: expected an http(s) URL, got {url!r}")
    return url.rstrip("/")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build a ``ClientConfig`` from the environment, raising ``ConfigError`` on bad values."""
    load_dotenv(env_file)
    env_name = (os.getenv("COMMENTS_ENV") or "dev").strip()
    overrides: dict[str, Any] = {}
    for setting in _SETTINGS:
        value = setting.read()
        if value is not MISSING:
            overrides[setting.attr] = value
    return ClientConfig(env_name=env_name, api_base_url=_base_url(env_name), **overrides)
