"""Drogue client configuration custom exceptions."""

from __future__ import annotations

from drogue_client.errors.meta import DrogueClientError


class DrogueConfigError(DrogueClientError):
    """Error base class for all config related errors."""


class MissingCredentialsConfigError(DrogueConfigError):
    """Error if no credentials config is available."""

    def __init__(self) -> None:
        super().__init__(
            "To create a DrogueContext you need to provide a credentials config.\n"
            "Either through the token_provider parameter or through the config file.",
        )


class TokenProviderConfigError(DrogueConfigError):
    """Error if the credentials config is invalid."""


class MissingDrogueHostError(TokenProviderConfigError):
    """Raised when the domain is not in the config."""

    def __init__(self) -> None:
        super().__init__("A domain is missing in your credentials configuration.")
