"""Payloads of the user API, authenticating access tokens and authorizing operations of a user on an application.

Unlike the registry payloads, these use the snake_case names of the service on the wire.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from drogue_client.errors.service import ForbiddenError


class DevicePermission(str, enum.Enum):
    CREATE = "Create"
    DELETE = "Delete"
    WRITE = "Write"
    READ = "Read"


class ApplicationPermission(str, enum.Enum):
    CREATE = "Create"
    DELETE = "Delete"
    WRITE = "Write"
    READ = "Read"
    TRANSFER = "Transfer"
    SUBSCRIBE = "Subscribe"
    COMMAND = "Command"
    MEMBERS = "Members"


class _UserModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DeviceAccess(_UserModel):
    """Permission on the devices of an application, ``{"Device": "Read"}``."""

    permission: DevicePermission = Field(alias="Device")


class ApplicationAccess(_UserModel):
    """Permission on the application itself, ``{"App": "Read"}``."""

    permission: ApplicationPermission = Field(alias="App")


Permission = Union[DeviceAccess, ApplicationAccess]


class AuthorizationRequest(_UserModel):
    application: str
    permission: Permission
    user_id: str | None = None
    roles: list[str] = Field(default_factory=list)


class Outcome(str, enum.Enum):
    ALLOW = "allow"
    DENY = "deny"

    def is_allowed(self) -> bool:
        return self is Outcome.ALLOW

    def ensure(self, error: Callable[[], Exception] | None = None) -> None:
        """Raises the error returned by ``error`` if the outcome is deny.

        Args:
            error: creates the exception to raise, defaults to :py:class:`~drogue_client.errors.service.ForbiddenError`
        """
        if self.is_allowed():
            return
        raise error() if error is not None else ForbiddenError(info="Authorization was denied.")


class AuthorizationResponse(_UserModel):
    outcome: Outcome


class UserDetails(_UserModel):
    """The authenticated user, as seen by the services."""

    user_id: str
    roles: list[str] = Field(default_factory=list)
    claims: dict[str, Any] | None = None


class AuthenticationRequest(_UserModel):
    user_id: str
    access_token: str = Field(repr=False)


class KnownUser(_UserModel):
    known: UserDetails


class AuthenticationResponse(_UserModel):
    """``{"outcome": {"known": {...}}}`` for a valid access token, ``{"outcome": "unknown"}`` otherwise."""

    outcome: Union[KnownUser, Literal["unknown"]]

    def user_details(self) -> UserDetails | None:
        return self.outcome.known if isinstance(self.outcome, KnownUser) else None
