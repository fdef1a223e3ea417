"""Where the events of an application are forwarded to."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from drogue_client.translator import Dialect, Section, dialect
from drogue_client.utils.serde import DrogueModel

EXTERNAL_KAFKA = "externalKafka"


class ExternalKafkaSpec(DrogueModel):
    bootstrap_servers: str
    topic: str
    properties: dict[str, str] = Field(default_factory=dict)


@dialect(Section.SPEC, "downstream")
class DownstreamSpec(Dialect, DrogueModel):
    """Base of the downstream variants, :py:class:`InternalDownstream` or :py:class:`ExternalKafkaDownstream`.

    The variant is selected by the first key of the section, unknown keys
    fall back to the internal downstream.
    """

    @classmethod
    def from_section_value(cls, value: Any) -> DownstreamSpec:  # noqa: ANN401
        if not isinstance(value, dict):
            msg = f"expected an object, got {type(value).__name__}"
            raise TypeError(msg)
        if next(iter(value), None) == EXTERNAL_KAFKA:
            return ExternalKafkaDownstream.model_validate(value)
        return InternalDownstream()

    @classmethod
    def default_value(cls) -> DownstreamSpec:
        return InternalDownstream()


class InternalDownstream(DownstreamSpec):
    """Events are stored in the Kafka instance managed by Drogue Cloud."""

    def to_section_value(self) -> Any:  # noqa: ANN401
        return {}


class ExternalKafkaDownstream(DownstreamSpec):
    """Events are forwarded to an external Kafka cluster."""

    external_kafka: ExternalKafkaSpec
