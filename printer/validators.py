from __future__ import annotations

"""Format checks applied to collected answers."""

import re
from typing import Callable, Optional

__all__ = ["Validator", "DATE_FORMAT_HINT", "is_valid_date", "validate"]

Validator = Callable[[str], bool]

# Shape only: ``99/99/9999`` is accepted on purpose.
_DATE_RE = re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}")

DATE_FORMAT_HINT = "DD/MM/YYYY"


def is_valid_date(text: Optional[str]) -> bool:
    """Return ``True`` when ``text`` looks like ``DD/MM/YYYY``."""
    if not text:
        return False
    return _DATE_RE.fullmatch(text) is not None


def validate(text: Optional[str], validator: Optional[Validator] = None) -> bool:
    """Apply the non-empty rule and then ``validator`` if one is given."""
    if text is None or not text.strip():
        return False
    if validator is None:
        return True
    return bool(validator(text))
