from __future__ import annotations

import re
from dataclasses import dataclass

# ASCII only: accented local parts and surrounding whitespace are rejected.
EMAIL_PATTERN = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$", re.ASCII)
INVALID_EMAIL_MESSAGE = "Please enter the valid email"


@dataclass(frozen=True)
class SearchValidation:
    valid: bool
    text: str
    error: str | None = None


def validate(text: str) -> SearchValidation:
    if not EMAIL_PATTERN.fullmatch(text):
        return SearchValidation(valid=False, text=text, error=INVALID_EMAIL_MESSAGE)
    return SearchValidation(valid=True, text=text)
