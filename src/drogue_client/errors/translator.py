"""Errors raised when translating between the spec/status sections and their typed dialects."""

from __future__ import annotations

from drogue_client.errors.meta import DrogueClientError


class SectionDecodeError(DrogueClientError):
    """A section is present, but its value does not decode into the requested type.

    The underlying (pydantic) error is available as ``__cause__``.
    """

    def __init__(self, section: str, key: str, target: str, reason: str) -> None:
        self.section = section
        self.key = key
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to decode {section}.{key} as {target}: {reason}")


class SectionEncodeError(DrogueClientError):
    """A typed value could not be encoded into its section."""

    def __init__(self, section: str, key: str, reason: str) -> None:
        self.section = section
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to encode {section}.{key}: {reason}")
