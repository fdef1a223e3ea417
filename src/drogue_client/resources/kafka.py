"""Status of the Kafka resources, which the operator provisions for an application."""

from __future__ import annotations

from pydantic import Field

from drogue_client.resources.conditions import Conditions
from drogue_client.translator import Dialect, Section, dialect
from drogue_client.utils.serde import DrogueModel


class KafkaDownstreamStatus(DrogueModel):
    """Where to consume the events of the application from."""

    topic: str
    bootstrap_servers: str
    properties: dict[str, str] = Field(default_factory=dict)


class KafkaUserStatus(DrogueModel):
    username: str
    password: str = Field(repr=False)
    mechanism: str


@dialect(Section.STATUS, "kafka")
class KafkaAppStatus(Dialect, DrogueModel):
    observed_generation: int = 0
    conditions: Conditions = Field(default_factory=Conditions)
    downstream: KafkaDownstreamStatus | None = None
    user: KafkaUserStatus | None = None
