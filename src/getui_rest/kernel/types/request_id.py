"""Request identifiers attached to push calls."""

from __future__ import annotations

import uuid

REQUEST_ID_LENGTH = 30


def new_request_id() -> str:
    """Return a 30-character hex id derived from a time-based UUID.

    The provider deduplicates pushes by ``requestid`` within the token's
    validity window; ``uuid1`` is time-ordered, so ids do not repeat there.
    """
    return uuid.uuid1().hex[:REQUEST_ID_LENGTH]


__all__ = ["REQUEST_ID_LENGTH", "new_request_id"]
