"""Payloads of the discovery endpoints."""

from __future__ import annotations

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from drogue_client.utils.serde import DrogueModel


class HttpEndpoint(DrogueModel):
    url: str


class MqttEndpoint(DrogueModel):
    host: str
    port: int


class CoapEndpoint(DrogueModel):
    url: str


class Endpoints(DrogueModel):
    """The public endpoints of a Drogue Cloud instance, fields unknown to this client are ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    api: str | None = None
    console: str | None = None
    coap: CoapEndpoint | None = None
    http: HttpEndpoint | None = None
    mqtt: MqttEndpoint | None = None
    mqtt_ws: HttpEndpoint | None = None
    mqtt_integration: MqttEndpoint | None = None
    mqtt_integration_ws: HttpEndpoint | None = None
    websocket_integration: HttpEndpoint | None = None
    sso: str | None = None
    issuer_url: str | None = None
    redirect_url: str | None = None
    registry: HttpEndpoint | None = None
    command_url: str | None = None
    kafka_bootstrap_servers: str | None = None
    local_certs: bool = False
    demos: list[tuple[str, str]] = Field(default_factory=list)


class DrogueVersion(DrogueModel):
    version: str
