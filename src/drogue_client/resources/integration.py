"""Messages a client can send on the websocket integration."""

from __future__ import annotations

from pydantic import Field

from drogue_client.utils.serde import DrogueModel


class RefreshAccessToken(DrogueModel):
    """Replaces the token of an open websocket integration connection, before the old one expires."""

    token: str = Field(alias="RefreshAccessToken", repr=False)
