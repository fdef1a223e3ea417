"""External HTTP endpoints, used by the knative integration, the processing steps and device commands."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import Field

from drogue_client.utils.serde import DrogueModel, HumantimeDuration

NO_AUTHENTICATION = "none"


class BasicAuthentication(DrogueModel):
    """Username and optional password for HTTP basic authentication."""

    username: str
    password: str | None = Field(default=None, repr=False)


class BearerAuthentication(DrogueModel):
    """A static bearer token."""

    token: str = Field(repr=False)


class Basic(DrogueModel):
    basic: BasicAuthentication


class Bearer(DrogueModel):
    bearer: BearerAuthentication


Authentication = Union[Literal["none"], Basic, Bearer]
"""``"none"``, ``{"basic": {...}}`` or ``{"bearer": {...}}``."""


class Header(DrogueModel):
    name: str
    value: str


class TlsOptions(DrogueModel):
    """TLS settings for an endpoint, the certificate is PEM encoded."""

    insecure: bool = False
    certificate: str | None = None


class ExternalEndpoint(DrogueModel):
    """An HTTP endpoint outside of Drogue Cloud."""

    method: str | None = None
    url: str
    tls: TlsOptions | None = None
    auth: Authentication = NO_AUTHENTICATION
    headers: list[Header] = Field(default_factory=list)
    timeout: HumantimeDuration | None = None
