"""Contains the DrogueContext class, a state object for API clients."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import requests

from drogue_client.__about__ import __version__
from drogue_client.clients import admin, command, context_client, discovery, registry, tokens, user
from drogue_client.config.config import Config, get_config_dict, parse_credentials_config, parse_general_config

if TYPE_CHECKING:
    from drogue_client.config.config_types import Host
    from drogue_client.config.token_provider import Credentials, TokenProvider


class DrogueContext:
    """DrogueContext holds config and token provider for API clients."""

    config: Config
    token_provider: TokenProvider
    client: requests.Session

    def __init__(
        self,
        config: Config | None = None,
        token_provider: TokenProvider | None = None,
        profile: str | None = None,
    ) -> None:
        """Creates the context, the config and credentials not passed are read from the config files.

        Args:
            config: the general configuration
            token_provider: provides the host and the credentials
            profile: the profile to read from the config files
        """
        if token_provider is None:
            config_dict = get_config_dict(profile)
            token_provider = parse_credentials_config(config_dict)
        elif config is None:
            # the credentials come from the caller, only the general config is read
            config_dict = get_config_dict(profile, require_credentials=False)
        self.token_provider = token_provider
        self.config = config if config is not None else parse_general_config(config_dict)

        if not self.config.requests_session:
            self.client = context_client.ContextHTTPClient(
                debug=self.config.debug, requests_ca_bundle=self.config.requests_ca_bundle
            )
        else:
            self.client = self.config.requests_session

        self.client.auth = lambda r: self.token_provider.requests_auth_handler(r)
        self.client.headers["User-Agent"] = requests.utils.default_user_agent(
            f"drogue-client/{__version__}/python-requests"
        )

        if self.config.rich_traceback:
            from rich.traceback import install

            install()

    @property
    def host(self) -> Host:
        """Returns the host from the token provider."""
        return self.token_provider.host

    @property
    def credentials(self) -> Credentials | None:
        """Returns the credentials from the token provider."""
        return self.token_provider.credentials

    @cached_property
    def registry(self) -> registry.RegistryClient:
        """Returns :py:class:`drogue_client.clients.registry.RegistryClient`."""
        return registry.RegistryClient(self)

    @cached_property
    def admin(self) -> admin.AdminClient:
        """Returns :py:class:`drogue_client.clients.admin.AdminClient`."""
        return admin.AdminClient(self)

    @cached_property
    def tokens(self) -> tokens.TokensClient:
        """Returns :py:class:`drogue_client.clients.tokens.TokensClient`."""
        return tokens.TokensClient(self)

    @cached_property
    def command(self) -> command.CommandClient:
        """Returns :py:class:`drogue_client.clients.command.CommandClient`."""
        return command.CommandClient(self)

    @cached_property
    def discovery(self) -> discovery.DiscoveryClient:
        """Returns :py:class:`drogue_client.clients.discovery.DiscoveryClient`."""
        return discovery.DiscoveryClient(self)

    @cached_property
    def user(self) -> user.UserClient:
        """Returns :py:class:`drogue_client.clients.user.UserClient`."""
        return user.UserClient(self)
