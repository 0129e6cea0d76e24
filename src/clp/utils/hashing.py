"""Deterministic identifiers for inspection events."""

from __future__ import annotations

import hashlib
from datetime import date

KEY_BYTES = 6
FIELD_SEPARATOR = b"\x1f"


def event_key(complaint_id: str, event_type: str, event_date: date) -> str:
    """12-character key for a (complaint, type, calendar day) triple.

    Fields are separated by a unit separator so ``("10", "x")`` and
    ``("1", "0x")`` never share a key.
    """
    digest = hashlib.blake2b(digest_size=KEY_BYTES)
    for part in (complaint_id, event_type, event_date.isoformat()):
        digest.update(part.encode("utf-8"))
        digest.update(FIELD_SEPARATOR)
    return digest.hexdigest()
