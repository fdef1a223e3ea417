"""MQTT settings, e.g. the topic layout a device or application uses."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import Field

from drogue_client.utils.serde import DrogueModel, TaggedModel


class DrogueV1Dialect(TaggedModel):
    """The default Drogue topic layout, ``<channel>`` for devices."""

    type: Literal["drogue/v1"] = "drogue/v1"


class PlainTopicDialect(TaggedModel):
    """Topics are used as they are, optionally prefixed with the device name."""

    type: Literal["plainTopic"] = "plainTopic"
    device_prefix: bool = False


MqttDialect = Union[DrogueV1Dialect, PlainTopicDialect]


class Mqtt(DrogueModel):
    dialect: MqttDialect = Field(default_factory=DrogueV1Dialect, discriminator="type")
