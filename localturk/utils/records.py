"""Helpers for comparing string records coming from CSV files and HTML forms."""

from __future__ import annotations

import re
import unicodedata
from typing import Dict, Mapping

_NEWLINES = re.compile(r"\r\n?")
_HSPACE = re.compile(r"[ \t\f\v\u00a0]+")


def normalize_value(value: str) -> str:
    """Canonical form of a single field value.

    Browsers submit textarea content with CRLF line breaks and may keep
    surrounding blanks, so both are folded away. Unicode is NFC-composed.
    """
    value = unicodedata.normalize("NFC", str(value))
    value = _NEWLINES.sub("\n", value)
    value = _HSPACE.sub(" ", value)
    return "\n".join(line.strip() for line in value.split("\n")).strip()


def normalize_values(record: Mapping[str, str]) -> Dict[str, str]:
    return {k: normalize_value(v) for k, v in record.items()}


def is_superset_of(big: Mapping[str, str], small: Mapping[str, str]) -> bool:
    """True when every key of ``small`` is in ``big`` with an equal value."""
    for k, v in small.items():
        if k not in big or big[k] != v:
            return False
    return True
