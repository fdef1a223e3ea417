"""Rules for processing the events published by devices and the commands sent to them.

Each rule has a condition (``when``) and a list of steps (``then``). The
conditions and steps are externally tagged, e.g.:

.. code-block:: json

    {"rules": [{"when": {"isChannel": "telemetry"}, "then": [{"setAttribute": {"name": "a", "value": "b"}}]}]}
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import Field

from drogue_client.resources.endpoint import ExternalEndpoint
from drogue_client.translator import Dialect, Section, dialect
from drogue_client.utils.serde import DrogueModel, TaggedModel


class IsChannel(DrogueModel):
    is_channel: str


class Not(DrogueModel):
    not_: When = Field(alias="not")


class And(DrogueModel):
    and_: list[When] = Field(alias="and")


class Or(DrogueModel):
    or_: list[When] = Field(alias="or")


When = Union[Literal["always"], IsChannel, Not, And, Or]
"""The condition of a rule."""


class CloudEventRequest(TaggedModel):
    """Send the event as cloud event, in binary or structured mode."""

    type: Literal["cloudEvent"] = "cloudEvent"
    mode: Literal["binary", "structured"] = "binary"


RequestType = CloudEventRequest


class CloudEventResponse(TaggedModel):
    """The response is a cloud event."""

    type: Literal["cloudEvent"] = "cloudEvent"


class RawResponse(TaggedModel):
    """The response body replaces the payload, keeping the event attributes."""

    type: Literal["raw"] = "raw"


class AssumeStructuredCloudEventResponse(TaggedModel):
    """The response is a structured cloud event, regardless of the content type."""

    type: Literal["assumeStructuredCloudEvent"] = "assumeStructuredCloudEvent"


ResponseType = Union[CloudEventResponse, RawResponse, AssumeStructuredCloudEventResponse]


class ValidateSpec(DrogueModel):
    """Call an external endpoint to accept or reject the event."""

    request: RequestType = Field(default_factory=CloudEventRequest)
    endpoint: ExternalEndpoint


class EnrichSpec(DrogueModel):
    """Call an external endpoint and replace the event with its response."""

    request: RequestType = Field(default_factory=CloudEventRequest)
    response: ResponseType = Field(default_factory=CloudEventResponse)
    endpoint: ExternalEndpoint


class SetValue(DrogueModel):
    name: str
    value: str


class Reject(DrogueModel):
    reject: str


class SetAttribute(DrogueModel):
    set_attribute: SetValue


class RemoveAttribute(DrogueModel):
    remove_attribute: str


class SetExtension(DrogueModel):
    set_extension: SetValue


class RemoveExtension(DrogueModel):
    remove_extension: str


class Validate(DrogueModel):
    validate_: ValidateSpec = Field(alias="validate")


class Enrich(DrogueModel):
    enrich: EnrichSpec


Step = Union[
    Literal["drop", "break"],
    Reject,
    SetAttribute,
    RemoveAttribute,
    SetExtension,
    RemoveExtension,
    Validate,
    Enrich,
]
"""A processing step, ``drop`` and ``break`` stop processing the rules."""


class Rule(DrogueModel):
    when: When = "always"
    then: list[Step] = Field(default_factory=list)


class ProcessSpec(DrogueModel):
    rules: list[Rule] = Field(default_factory=list)


@dialect(Section.SPEC, "publish")
class PublishSpec(Dialect, ProcessSpec):
    """Rules applied to events published by devices."""


@dialect(Section.SPEC, "command")
class CommandSpec(Dialect, ProcessSpec):
    """Rules applied to commands, before they are sent to the device."""


Not.model_rebuild()
And.model_rebuild()
Or.model_rebuild()
Rule.model_rebuild()
ProcessSpec.model_rebuild()
PublishSpec.model_rebuild()
CommandSpec.model_rebuild()
