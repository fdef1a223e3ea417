"""Defines types for the Drogue Cloud APIs, for better readability of the code."""

from __future__ import annotations

from typing import Any

ApplicationName = str
"""The name of an application, unique in a Drogue Cloud instance."""

DeviceName = str
"""The name of a device, unique in its application."""

UserId = str
"""The id of a user, as issued by the identity provider."""

TokenPrefix = str
"""The public prefix of an access token, used to identify (and delete) it."""

SectionMap = dict[str, Any]
"""The untyped ``spec`` or ``status`` object of a resource, keyed by section name."""
