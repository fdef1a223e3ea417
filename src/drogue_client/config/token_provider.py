"""The drogue client token providers, supplying the credentials of each request."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from drogue_client.config.config_types import Host
from drogue_client.utils.config import entry_point_token_provider

if TYPE_CHECKING:
    import requests

    from drogue_client.config.config_types import Token


@dataclass(frozen=True)
class BearerCredentials:
    """An OAuth/OpenID access token, sent as ``Authorization: Bearer``."""

    token: Token = field(repr=False)

    def authorization_header(self) -> str:
        return f"Bearer {self.token}"


@dataclass(frozen=True)
class BasicCredentials:
    """A username with an access token or API key, sent as ``Authorization: Basic``."""

    username: str
    password: str = field(repr=False)

    def authorization_header(self) -> str:
        return "Basic " + base64.b64encode(f"{self.username}:{self.password}".encode()).decode("ascii")


Credentials = BearerCredentials | BasicCredentials


class TokenProvider:
    """Parent class for all TokenProviders.

    TokenProvider implementations always need to have these properties:
        host: the Drogue Cloud API host
        credentials: the credentials to send, or None for anonymous requests
    """

    def __init__(self, host: Host | str):
        """The TokenProvider base class.

        Args:
            host: the Drogue Cloud API host, either a domain or a full url
        """
        if isinstance(host, str):
            host = Host.parse(host)
        self.host = host

    @property
    def credentials(self) -> Credentials | None:
        """Returns the credentials from the provider."""
        msg = "This is only the base TokenProvider class and does not implement getting credentials."
        raise NotImplementedError(msg)

    def requests_auth_handler(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        """Sets the authorization header on the PreparedRequest object.

        Does not overwrite the authorization header if present, e.g. a token provided for a single request.
        """
        if (credentials := self.credentials) is not None:
            r.headers.setdefault("authorization", credentials.authorization_header())
        return r


class NoTokenProvider(TokenProvider):
    """Sends every request without credentials, only useful for the public endpoints."""

    @property
    def credentials(self) -> None:
        return None


class BearerTokenProvider(TokenProvider):
    """Sends a static bearer token, e.g. one obtained with ``drg whoami --token``."""

    def __init__(self, host: Host | str, token: Token) -> None:
        """Initialize the BearerTokenProvider.

        Args:
            host: the Drogue Cloud API host
            token: the bearer token
        """
        super().__init__(host)
        self._token = token

    @property
    def credentials(self) -> BearerCredentials:
        return BearerCredentials(self._token)


class AccessTokenProvider(TokenProvider):
    """Authenticates with a username and one of the user's access tokens."""

    def __init__(self, host: Host | str, user: str, token: Token) -> None:
        """Initialize the AccessTokenProvider.

        Args:
            host: the Drogue Cloud API host
            user: the username the access token belongs to
            token: the access token, created with the tokens API
        """
        super().__init__(host)
        self.user = user
        self._token = token

    @property
    def credentials(self) -> BasicCredentials:
        return BasicCredentials(self.user, self._token)


class ApiKeyProvider(TokenProvider):
    """Authenticates with a username and an API key."""

    def __init__(self, host: Host | str, user: str, key: str) -> None:
        """Initialize the ApiKeyProvider.

        Args:
            host: the Drogue Cloud API host
            user: the username the key belongs to
            key: the API key
        """
        super().__init__(host)
        self.user = user
        self._key = key

    @property
    def credentials(self) -> BasicCredentials:
        return BasicCredentials(self.user, self._key)


# [begin token_provider mapping]
TOKEN_PROVIDER_MAPPING = {
    "token": BearerTokenProvider,
    "access_token": AccessTokenProvider,
    "api_key": ApiKeyProvider,
    "anonymous": NoTokenProvider,
    **entry_point_token_provider(),
}
# [end token_provider mapping]
