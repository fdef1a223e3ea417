"""Payloads of the access token API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from drogue_client.utils.misc import EPOCH
from drogue_client.utils.serde import DrogueModel


class AccessToken(DrogueModel):
    """An existing access token, the secret itself is only returned when it is created."""

    created: datetime = EPOCH
    prefix: str = ""
    description: str | None = None


class CreatedAccessToken(DrogueModel):
    """A newly created access token, including the secret."""

    token: str = Field(repr=False)
    prefix: str
