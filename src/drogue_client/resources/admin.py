"""Payloads of the admin API: application members, their roles and ownership transfer."""

from __future__ import annotations

import enum

from pydantic import Field, RootModel

from drogue_client.utils.serde import DrogueModel


class Role(str, enum.Enum):
    """A role of a member of an application."""

    ADMIN = "admin"
    MANAGER = "manager"
    READER = "reader"
    SUBSCRIBER = "subscriber"
    PUBLISHER = "publisher"

    @property
    def display_name(self) -> str:
        return _ROLE_DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name

    @classmethod
    def parse(cls, value: str) -> Role:
        """Parses a role from its name, either lower case (``admin``) or capitalized (``Admin``).

        Raises:
            ValueError: if the value is not a known role
        """
        for role in cls:
            if value in (role.value, role.value.capitalize()):
                return role
        msg = f"Invalid role '{value}', must be one of {', '.join(r.value for r in cls)}"
        raise ValueError(msg)

    def implies(self, other: Role) -> bool:
        """Returns True if this role grants the permissions of the other role.

        Admin implies every role and a manager is also a reader.
        """
        return self is other or self is Role.ADMIN or (self is Role.MANAGER and other is Role.READER)


_ROLE_DISPLAY_NAMES = {
    Role.ADMIN: "Administrator",
    Role.MANAGER: "Manager",
    Role.READER: "Reader",
    Role.SUBSCRIBER: "Subscriber",
    Role.PUBLISHER: "Publisher",
}


class Roles(RootModel[list[Role]]):
    """The roles of a member, in the order they were granted."""

    root: list[Role] = Field(default_factory=list)

    def __iter__(self):
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def contains(self, role: Role) -> bool:
        """Returns True if one of the roles implies the given role."""
        return any(r.implies(role) for r in self.root)


class MemberEntry(DrogueModel):
    roles: Roles = Field(default_factory=Roles)


class Members(DrogueModel):
    """The members of an application, keyed by user id.

    The resource version must be sent back unchanged when updating the members.
    """

    resource_version: str | None = None
    members: dict[str, MemberEntry] = Field(default_factory=dict)


class TransferOwnership(DrogueModel):
    """A pending transfer of an application to a new owner."""

    new_user: str
