"""Pydantic base models and field types matching the JSON conventions of the Drogue Cloud APIs.

The APIs use camelCase keys and omit fields which are at their default value.
Binary values are standard base64 strings and durations are "humantime"
strings like ``30s`` or ``1m 30s``.
"""

from __future__ import annotations

import base64
import binascii
import re
from datetime import timedelta
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, model_serializer
from pydantic.alias_generators import to_camel

_HUMANTIME_REGEX = re.compile(r"\s*(\d+)\s*([a-zA-Z]+)")
_HUMANTIME_UNITS: dict[str, timedelta] = {
    **dict.fromkeys(("nsec", "ns"), timedelta(0)),
    **dict.fromkeys(("usec", "us"), timedelta(microseconds=1)),
    **dict.fromkeys(("msec", "ms"), timedelta(milliseconds=1)),
    **dict.fromkeys(("seconds", "second", "sec", "s"), timedelta(seconds=1)),
    **dict.fromkeys(("minutes", "minute", "min", "m"), timedelta(minutes=1)),
    **dict.fromkeys(("hours", "hour", "hr", "h"), timedelta(hours=1)),
    **dict.fromkeys(("days", "day", "d"), timedelta(days=1)),
    **dict.fromkeys(("weeks", "week", "w"), timedelta(weeks=1)),
    **dict.fromkeys(("months", "month", "M"), timedelta(seconds=2_630_016)),
    **dict.fromkeys(("years", "year", "y"), timedelta(seconds=31_557_600)),
}
# nanoseconds are below the resolution of timedelta and dropped
_HUMANTIME_FORMAT: tuple[tuple[str, timedelta], ...] = (
    ("day", timedelta(days=1)),
    ("h", timedelta(hours=1)),
    ("m", timedelta(minutes=1)),
    ("s", timedelta(seconds=1)),
    ("ms", timedelta(milliseconds=1)),
    ("us", timedelta(microseconds=1)),
)


def parse_humantime(value: str) -> timedelta:
    """Parses a humantime duration like ``1h 30m`` or ``500ms``.

    Raises:
        ValueError: if the string is not a valid duration
    """
    value = value.strip()
    if not value:
        msg = "empty duration"
        raise ValueError(msg)
    total = timedelta()
    pos = 0
    while pos < len(value):
        if not (match := _HUMANTIME_REGEX.match(value, pos)):
            msg = f"invalid duration '{value}'"
            raise ValueError(msg)
        number, unit = match.groups()
        if (unit_delta := _HUMANTIME_UNITS.get(unit)) is None:
            msg = f"unknown time unit '{unit}' in duration '{value}'"
            raise ValueError(msg)
        total += int(number) * unit_delta
        pos = match.end()
    return total


def format_humantime(value: timedelta) -> str:
    """Formats a duration the way humantime does, e.g. ``1m 30s``."""
    if value <= timedelta(0):
        return "0s"
    parts = []
    for unit, unit_delta in _HUMANTIME_FORMAT:
        count, value = divmod(value, unit_delta)
        if count:
            parts.append(f"{count}{unit}{'s' if unit == 'day' and count > 1 else ''}")
    return " ".join(parts)


def _humantime_validator(value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, str):
        return parse_humantime(value)
    return value


def _base64_validator(value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            msg = f"invalid base64 value: {e}"
            raise ValueError(msg) from e
    return value


HumantimeDuration = Annotated[
    timedelta,
    BeforeValidator(_humantime_validator),
    PlainSerializer(format_humantime, return_type=str),
]
"""A :py:class:`~datetime.timedelta`, serialized as a humantime string."""

Base64Bytes = Annotated[
    bytes,
    BeforeValidator(_base64_validator),
    PlainSerializer(lambda v: base64.b64encode(v).decode("ascii"), return_type=str),
]
"""Raw bytes, serialized as standard base64. Strings are decoded as base64, bytes are taken as they are."""


class DrogueModel(BaseModel):
    """Base class for all API payloads, using camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> Any:  # noqa: ANN401
        """Returns the JSON compatible representation, omitting fields at their default."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)


class TaggedModel(DrogueModel):
    """A variant of an internally tagged union.

    Subclasses define a ``type`` literal field, it is always serialized,
    even when it is the default.
    """

    @model_serializer(mode="wrap")
    def _serialize_with_tag(self, handler) -> Any:  # noqa: ANN001,ANN401
        data = handler(self)
        if isinstance(data, dict):
            return {"type": self.type, **data}  # type: ignore[attr-defined]
        return data
