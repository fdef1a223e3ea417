"""Typed clients for the Drogue IoT Cloud APIs."""

from drogue_client.__about__ import __version__
from drogue_client.config.config import Config
from drogue_client.config.config_types import Host
from drogue_client.config.context import DrogueContext
from drogue_client.config.token_provider import (
    AccessTokenProvider,
    ApiKeyProvider,
    BearerTokenProvider,
    NoTokenProvider,
)
from drogue_client.resources import Application, Device

__all__ = [
    "__version__",
    "Config",
    "Host",
    "DrogueContext",
    "AccessTokenProvider",
    "ApiKeyProvider",
    "BearerTokenProvider",
    "NoTokenProvider",
    "Application",
    "Device",
]
