"""Implementation of the access token API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from drogue_client.clients.api_client import APIClient
from drogue_client.errors.service import UnexpectedResponseError
from drogue_client.resources.tokens import AccessToken, CreatedAccessToken

if TYPE_CHECKING:
    from drogue_client.utils.api_types import TokenPrefix


class TokensClient(APIClient):
    """TokensClient class that implements methods from the 'api/tokens/v1alpha1' API."""

    api_name = "tokens"

    def get_tokens(self, **kwargs) -> list[AccessToken] | None:
        """Lists the access tokens of the current user, the secrets are not included."""
        return self.read(self.api_url(), list[AccessToken], **kwargs)

    def create_token(self, description: str | None = None, **kwargs) -> CreatedAccessToken:
        """Creates a new access token.

        The token itself is only part of this response, it can't be read again later.

        Args:
            description: an optional description of the token
            kwargs: gets passed to :py:meth:`APIClient.api_request`

        Raises:
            UnexpectedResponseError: if the response does not contain the token
        """
        params = {"description": description} if description is not None else None
        if (token := self.create(self.api_url(), target=CreatedAccessToken, params=params, **kwargs)) is None:
            msg = "The access token was created, but the response did not contain it."
            raise UnexpectedResponseError(info=msg)
        return token

    def delete_token(self, prefix: TokenPrefix, **kwargs) -> bool:
        """Deletes the access token with the prefix, False if there is no such token."""
        return self.delete(self.api_url(prefix), **kwargs)
