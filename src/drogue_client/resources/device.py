"""The device resource and its spec sections: core settings, credentials, gateways, commands and aliases."""

from __future__ import annotations

from datetime import datetime
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Literal, Union, get_args

from pydantic import ConfigDict, Field, RootModel, model_serializer, model_validator
from pydantic.alias_generators import to_camel

from drogue_client.resources.meta import ScopedMetadata
from drogue_client.resources.resource import Resource
from drogue_client.translator import Decoded, Dialect, Section, SectionResult, attribute, dialect
from drogue_client.utils.misc import utc_now
from drogue_client.utils.serde import Base64Bytes, DrogueModel

if TYPE_CHECKING:
    from drogue_client.utils.api_types import ApplicationName, DeviceName

PasswordScheme = Literal["plain", "bcrypt", "sha512"]


class Password(DrogueModel):
    """A password, either in plain text or hashed.

    Decodes from a bare string (a plain password) or from an object tagged with the scheme,
    ``{"bcrypt": "$2y$..."}``. It always encodes to the tagged form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    scheme: PasswordScheme = "plain"
    value: str = Field(repr=False)

    @classmethod
    def plain(cls, value: str) -> Password:
        return cls(scheme="plain", value=value)

    @classmethod
    def bcrypt(cls, value: str) -> Password:
        return cls(scheme="bcrypt", value=value)

    @classmethod
    def sha512(cls, value: str) -> Password:
        return cls(scheme="sha512", value=value)

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, str):
            return {"scheme": "plain", "value": data}
        if isinstance(data, dict) and not set(data) <= {"scheme", "value"}:
            if len(data) != 1:
                msg = f"expected exactly one password scheme, got {sorted(data)}"
                raise ValueError(msg)
            ((scheme, value),) = data.items()
            if scheme not in get_args(PasswordScheme):
                msg = f"unknown password scheme '{scheme}', expected one of {get_args(PasswordScheme)}"
                raise ValueError(msg)
            return {"scheme": scheme, "value": value}
        return data

    @model_serializer
    def _to_wire(self) -> dict[str, str]:
        return {self.scheme: self.value}


class UsernamePassword(DrogueModel):
    username: str
    password: Password
    unique: bool = False


class Validity(DrogueModel):
    """The time range a pre-shared key may be used in, both ends inclusive."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    not_before: datetime
    not_after: datetime

    def is_valid(self, at: datetime) -> bool:
        return self.not_before <= at <= self.not_after


@total_ordering
class PreSharedKey(DrogueModel):
    """A pre-shared key, ordered by key, then keys without validity first, then by validity."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    key: Base64Bytes = Field(repr=False)
    validity: Validity | None = None

    def _sort_key(self) -> tuple:
        if self.validity is None:
            return (self.key, False, ())
        return (self.key, True, (self.validity.not_before, self.validity.not_after))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PreSharedKey):
            return NotImplemented
        return self._sort_key() < other._sort_key()


class UserCredential(DrogueModel):
    user: UsernamePassword


class PasswordCredential(DrogueModel):
    password: Password = Field(alias="pass")


class CertificateCredential(DrogueModel):
    cert: str


class PreSharedKeyCredential(DrogueModel):
    psk: PreSharedKey


Credential = Union[UserCredential, PasswordCredential, CertificateCredential, PreSharedKeyCredential]
"""A single credential, externally tagged with ``user``, ``pass``, ``cert`` or ``psk``."""


@dialect(Section.SPEC, "core")
class DeviceSpecCore(Dialect, DrogueModel):
    disabled: bool = False


@dialect(Section.SPEC, "credentials")
class DeviceSpecCredentials(Dialect, DrogueModel):
    """The credentials of the device, superseded by :py:class:`DeviceSpecAuthentication`."""

    credentials: list[Credential] = Field(default_factory=list)


@dialect(Section.SPEC, "authentication")
class DeviceSpecAuthentication(Dialect, DrogueModel):
    """The credentials the device may authenticate with."""

    credentials: list[Credential] = Field(default_factory=list)


@dialect(Section.SPEC, "gatewaySelector")
class DeviceSpecGatewaySelector(Dialect, DrogueModel):
    """The devices allowed to act as a gateway for this device."""

    match_names: list[str] = Field(default_factory=list)


class ExternalCommandEndpoint(DrogueModel):
    """Commands are delivered by calling an HTTP endpoint."""

    type: str | None = None
    url: str
    method: str = ""
    headers: dict[str, str] = Field(default_factory=dict)


class Command(DrogueModel):
    external: ExternalCommandEndpoint


@dialect(Section.SPEC, "commands")
class DeviceSpecCommands(Dialect, DrogueModel):
    commands: list[Command] = Field(default_factory=list)


@dialect(Section.SPEC, "alias")
class DeviceSpecAliases(Dialect, RootModel[list[str]]):
    """Additional names the device can be addressed with."""

    root: list[str] = Field(default_factory=list)


@attribute(DeviceSpecCore)
def device_enabled(outcome: SectionResult[DeviceSpecCore]) -> bool:
    """Whether the device is enabled.

    A device without a core section is enabled, one with a malformed core section is not.
    """
    if outcome is None:
        return True
    if isinstance(outcome, Decoded):
        return not outcome.value.disabled
    return False


@attribute(DeviceSpecCommands)
def device_commands(outcome: SectionResult[DeviceSpecCommands]) -> list[Command]:
    """The commands of the device, empty unless the section is present and valid."""
    if isinstance(outcome, Decoded):
        return list(outcome.value.commands)
    return []


@attribute(DeviceSpecCommands)
def first_device_command(outcome: SectionResult[DeviceSpecCommands]) -> Command | None:
    """The first command of the device, if any."""
    return next(iter(device_commands.extract(outcome)), None)


class Device(Resource):
    """A device, scoped to an application."""

    metadata: ScopedMetadata

    @classmethod
    def new(cls, application: ApplicationName, name: DeviceName) -> Device:
        """Creates a new device, with the creation timestamp set to now."""
        return cls(metadata=ScopedMetadata(application=application, name=name, creation_timestamp=utc_now()))

    @property
    def name(self) -> DeviceName:
        """The name of the device."""
        return self.metadata.name

    @property
    def application(self) -> ApplicationName:
        """The name of the application the device belongs to."""
        return self.metadata.application

    def validate_device(self) -> bool:
        """Returns True if the device is enabled, see :py:func:`device_enabled`."""
        return self.attribute(device_enabled)

    def add_credential(self, credential: Credential) -> None:
        """Adds a credential to the authentication section, and to the legacy credentials section.

        Raises:
            SectionDecodeError: if one of the sections is present but malformed
        """

        def append_authentication(authentication: DeviceSpecAuthentication) -> DeviceSpecAuthentication:
            authentication.credentials.append(credential)
            return authentication

        def append_credentials(credentials: DeviceSpecCredentials) -> DeviceSpecCredentials:
            credentials.credentials.append(credential)
            return credentials

        self.update_section(DeviceSpecAuthentication, append_authentication)
        self.update_section(DeviceSpecCredentials, append_credentials)
