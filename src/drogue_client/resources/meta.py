"""Metadata of the registry resources."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from drogue_client.utils.misc import EPOCH
from drogue_client.utils.serde import DrogueModel


class Metadata(DrogueModel):
    """The fields shared by the metadata of all resources.

    Unknown fields are rejected.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: str
    uid: str = ""
    creation_timestamp: datetime = EPOCH
    generation: int = 0
    resource_version: str = ""
    deletion_timestamp: datetime | None = None
    finalizers: list[str] = Field(default_factory=list)
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)

    def ensure_finalizer(self, finalizer: str) -> bool:
        """Adds the finalizer, unless it is already present.

        Returns:
            bool: True if the finalizer was added
        """
        if finalizer in self.finalizers:
            return False
        self.finalizers.append(finalizer)
        return True

    def remove_finalizer(self, finalizer: str) -> bool:
        """Removes all occurrences of the finalizer.

        Returns:
            bool: True if the finalizer was present
        """
        before = len(self.finalizers)
        self.finalizers = [f for f in self.finalizers if f != finalizer]
        return len(self.finalizers) != before

    def has_label(self, label: str) -> bool:
        """Returns True if the label is present, regardless of its value."""
        return label in self.labels

    def has_label_flag(self, label: str) -> bool:
        """Returns True if the label is present and its value is ``true`` (case insensitive)."""
        return self.labels.get(label, "").lower() == "true"


class NonScopedMetadata(Metadata):
    """Metadata of a resource which exists on its own, like an application."""


class ScopedMetadata(Metadata):
    """Metadata of a resource which lives in the scope of an application, like a device."""

    application: str
