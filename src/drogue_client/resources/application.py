"""The application resource and its trust anchor sections."""

from __future__ import annotations

from datetime import datetime
from typing import Union

from pydantic import Field

from drogue_client.resources.meta import NonScopedMetadata
from drogue_client.resources.resource import Resource
from drogue_client.translator import Dialect, Section, dialect
from drogue_client.utils.misc import utc_now
from drogue_client.utils.serde import Base64Bytes, DrogueModel


class Application(Resource):
    """An application, the tenant scope of devices."""

    metadata: NonScopedMetadata

    @classmethod
    def new(cls, name: str) -> Application:
        """Creates a new application, with the creation timestamp set to now."""
        return cls(metadata=NonScopedMetadata(name=name, creation_timestamp=utc_now()))

    @property
    def name(self) -> str:
        """The name of the application."""
        return self.metadata.name

    def add_trust_anchor(self, certificate: bytes) -> None:
        """Appends a PEM encoded certificate to the trust anchors of the application.

        Raises:
            SectionDecodeError: if the present trust anchors section is malformed
        """

        def append(anchors: ApplicationSpecTrustAnchors) -> ApplicationSpecTrustAnchors:
            anchors.anchors.append(ApplicationSpecTrustAnchorEntry(certificate=certificate))
            return anchors

        self.update_section(ApplicationSpecTrustAnchors, append)


class ApplicationSpecTrustAnchorEntry(DrogueModel):
    certificate: Base64Bytes


@dialect(Section.SPEC, "trustAnchors")
class ApplicationSpecTrustAnchors(Dialect, DrogueModel):
    """The certificates devices of this application may authenticate with."""

    anchors: list[ApplicationSpecTrustAnchorEntry] = Field(default_factory=list)


class ValidAnchor(DrogueModel):
    subject: str
    certificate: Base64Bytes
    not_before: datetime
    not_after: datetime


class InvalidAnchor(DrogueModel):
    error: str
    message: str


class ValidAnchorEntry(DrogueModel):
    valid: ValidAnchor


class InvalidAnchorEntry(DrogueModel):
    invalid: InvalidAnchor


ApplicationStatusTrustAnchorEntry = Union[ValidAnchorEntry, InvalidAnchorEntry]


@dialect(Section.STATUS, "trustAnchors")
class ApplicationStatusTrustAnchors(Dialect, DrogueModel):
    """The result of processing the trust anchors of the application spec, one entry per anchor."""

    anchors: list[ApplicationStatusTrustAnchorEntry] = Field(default_factory=list)
