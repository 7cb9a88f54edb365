from __future__ import annotations

import pytest

from comments_browser.search_validator import INVALID_EMAIL_MESSAGE, validate


@pytest.mark.parametrize("text", ["a@b.co", "Eliseo@gardner.biz", "jane.doe-1@mail.example.info", "user_9@x-y.org"])
def test_validate_accepts_email_shaped_text(text: str) -> None:
    result = validate(text)

    assert result.valid is True
    assert result.text == text
    assert result.error is None


@pytest.mark.parametrize(
    "text",
    [
        "not-an-email",
        "",
        "a@b",
        "a@b.c",
        "a b@c.com",
        "@b.co",
        "a@b.toolong",
        "josé@b.co",
        "a@bé.co",
        "  a@b.co  ",
        "a@b.co\n",
    ],
)
def test_validate_rejects_malformed_text(text: str) -> None:
    result = validate(text)

    assert result.valid is False
    assert result.error == INVALID_EMAIL_MESSAGE == "Please enter the valid email"
