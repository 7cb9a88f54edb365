from __future__ import annotations

import pytest

from comments_browser.config import DEFAULT_API_BASE_URL, ConfigError, load_config

_ENV_KEYS = (
    "COMMENTS_ENV",
    "COMMENTS_API_BASE_URL",
    "COMMENTS_API_BASE_URL_DEV",
    "COMMENTS_API_BASE_URL_STAGING",
    "COMMENTS_PAGE_SIZE",
    "COMMENTS_RETRIES",
    "COMMENTS_VERIFY_SSL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        # Registers the key so values loaded from a .env file are undone after the test.
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_load_config_defaults(tmp_path) -> None:
    cfg = load_config(str(tmp_path / "missing.env"))

    assert cfg.api_base_url == DEFAULT_API_BASE_URL
    assert cfg.env_name == "dev"
    assert cfg.page_size == 5
    assert cfg.retries == 0


def test_load_config_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMMENTS_ENV", "staging")
    monkeypatch.setenv("COMMENTS_API_BASE_URL_STAGING", "https://staging.example.com/")
    cfg = load_config()
    assert cfg.api_base_url == "https://staging.example.com"
    assert cfg.normalized_env == "staging"


def test_load_config_reads_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("COMMENTS_API_BASE_URL=https://local.example.com\nCOMMENTS_PAGE_SIZE=20\n", encoding="utf-8")

    cfg = load_config(str(env_file))

    assert cfg.api_base_url == "https://local.example.com"
    assert cfg.page_size == 20


def test_load_config_rejects_non_http_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMMENTS_API_BASE_URL", "ftp://example.com")

    with pytest.raises(ConfigError, match="COMMENTS_API_BASE_URL"):
        load_config()


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("COMMENTS_CONNECT_TIMEOUT_SECONDS", "0"),
        ("COMMENTS_READ_TIMEOUT_SECONDS", "0"),
        ("COMMENTS_RETRIES", "-1"),
        ("COMMENTS_RETRY_BACKOFF_SECONDS", "-0.1"),
        ("COMMENTS_MAX_CONNECTIONS", "0"),
        ("COMMENTS_PAGE_SIZE", "0"),
    ],
)
def test_load_config_rejects_invalid_ranges(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError, match=key):
        load_config()


@pytest.mark.parametrize(
    "key",
    ["COMMENTS_READ_TIMEOUT_SECONDS", "COMMENTS_RETRIES", "COMMENTS_VERIFY_SSL", "COMMENTS_MAX_CONNECTIONS", "COMMENTS_PAGE_SIZE"],
)
def test_load_config_rejects_invalid_types(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.setenv(key, "abc")

    with pytest.raises(ConfigError, match=key):
        load_config()


def test_blank_values_keep_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMMENTS_PAGE_SIZE", "  ")
    monkeypatch.setenv("COMMENTS_RETRIES", "")

    cfg = load_config()

    assert cfg.page_size == 5
    assert cfg.retries == 0


@pytest.mark.parametrize(("raw", "expected"), [("false", False), ("0", False), ("Yes", True), ("on", True)])
def test_verify_ssl_flag(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("COMMENTS_VERIFY_SSL", raw)

    assert load_config().verify_ssl is expected
