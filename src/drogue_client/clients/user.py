"""Implementation of the user API, authenticating access tokens and checking the permissions of a user."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from drogue_client.clients.api_client import APIClient
from drogue_client.errors.service import UnexpectedResponseError
from drogue_client.resources.user import (
    AuthenticationRequest,
    AuthenticationResponse,
    AuthorizationRequest,
    AuthorizationResponse,
)

if TYPE_CHECKING:
    from pydantic import BaseModel

    from drogue_client.resources.user import UserDetails

R = TypeVar("R")


class UserClient(APIClient):
    """UserClient class that implements methods from the 'api/user/v1alpha1' API."""

    api_name = "user"

    def authenticate_access_token(self, request: AuthenticationRequest, **kwargs) -> UserDetails | None:
        """Validates an access token of a user.

        Returns:
            the details of the user the token belongs to, None if the token is unknown

        Raises:
            UnexpectedResponseError: if the service does not return an outcome
        """
        return self._post_outcome("authn", request, AuthenticationResponse, **kwargs).user_details()

    def authorize(self, request: AuthorizationRequest, **kwargs) -> AuthorizationResponse:
        """Asks the service whether the user may perform the operation on the application.

        Raises:
            UnexpectedResponseError: if the service does not return an outcome
        """
        return self._post_outcome("authz", request, AuthorizationResponse, **kwargs)

    def _post_outcome(self, endpoint: str, request: BaseModel, target: type[R], **kwargs) -> R:
        if (response := self.create(self.api_url(endpoint), request, target=target, **kwargs)) is None:
            msg = f"The {endpoint} request was accepted, but the response did not contain an outcome."
            raise UnexpectedResponseError(info=msg)
        return response
