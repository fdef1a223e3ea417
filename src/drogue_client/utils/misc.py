"""These are miscellaneous utility functions."""

from __future__ import annotations

from datetime import datetime, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
"""The Unix epoch, used as the creation timestamp when a resource does not carry one."""


def utc_now() -> datetime:
    """Returns the current time, timezone aware in UTC."""
    return datetime.now(tz=timezone.utc)
