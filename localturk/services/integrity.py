"""Data-quality check run on every submitted form."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

NO_NEW_KEYS_WARNING = (
    'No new keys in output. Make sure your &lt;input&gt; elements have "name" attributes'
)


def check_output(record: Mapping[str, str], expected_keys: Iterable[str]) -> Optional[str]:
    """Returns a warning when the submission adds no key beyond the task columns.

    A form whose answer inputs lack a ``name`` attribute posts back only the
    hidden task fields, so nothing new gets recorded. This never rejects the
    submission; the row has already been written when it runs.
    """
    known = set(expected_keys)
    for key in record:
        if key not in known:
            return None
    logger.warning("Submission has no keys outside the task columns: %s", sorted(record))
    return NO_NEW_KEYS_WARNING


class FlashMessage:
    """Single-slot message shown on the next rendered page, then dropped."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._message: Optional[str] = None

    def set(self, message: str) -> None:
        with self._lock:
            self._message = message

    def take_and_clear(self) -> Optional[str]:
        with self._lock:
            message, self._message = self._message, None
            return message
