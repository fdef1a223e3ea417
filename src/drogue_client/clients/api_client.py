"""API client parent class and the interpretation of the responses of the Drogue Cloud APIs."""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING, Any, ClassVar, Literal, TypeVar

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from drogue_client.errors.handling import ErrorHandlingConfig, raise_drogue_api_error
from drogue_client.errors.service import ResponseSyntaxError, UnexpectedResponseError
from drogue_client.utils.clients import build_api_url

if TYPE_CHECKING:
    from typing import NoReturn

    from requests import Response

    from drogue_client.config.context import DrogueContext

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@cache
def _type_adapter(target: Any) -> TypeAdapter:  # noqa: ANN401
    return TypeAdapter(target)


def _anonymous(r: requests.PreparedRequest) -> requests.PreparedRequest:
    return r


def to_payload(value: Any) -> Any:  # noqa: ANN401
    """Converts pydantic models to their JSON representation, other values are passed through."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_defaults=True)
    return value


def parse_response(response: Response, target: type[T] | Any) -> T:  # noqa: ANN401
    """Decodes the JSON body of the response as ``target``.

    Raises:
        ResponseSyntaxError: if the body is not JSON or does not match the expected type
    """
    try:
        body = response.json()
    except requests.exceptions.JSONDecodeError as e:
        msg = f"Response of {response.request.method} {response.url} is not valid JSON: {e}"
        raise ResponseSyntaxError(msg) from e
    try:
        return _type_adapter(target).validate_python(body)
    except ValidationError as e:
        name = getattr(target, "__name__", repr(target))
        msg = f"Response of {response.request.method} {response.url} is not a valid {name}: {e}"
        raise ResponseSyntaxError(msg) from e


class APIClient:
    """Base class for API clients."""

    """The name of the API, it is used to build the api url `https://host/api/<api_name>/<api_version>/...`."""
    api_name: ClassVar[str]
    """The version of the API."""
    api_version: ClassVar[str] = "v1alpha1"

    def __init__(self, context: DrogueContext) -> None:
        self.context = context

    def api_url(self, *segments: str) -> str:
        """Returns the API URL for the path segments, each segment is percent encoded."""
        return build_api_url(self.context.host.url, self.api_name, self.api_version, *segments)

    def api_request(
        self,
        method: str,
        url: str,
        params: Any = None,  # noqa: ANN401
        json: Any = None,  # noqa: ANN401
        headers: dict | None = None,
        timeout: Any = None,  # noqa: ANN401
        provided_token: str | None = None,
        authenticated: bool = True,
        error_handling: ErrorHandlingConfig | Literal[False] | None = None,
        **kwargs,
    ) -> Response:
        """Make a request to the Drogue Cloud API.

        Args:
            method: see :py:meth:`requests.Session.request`
            url: the full url, see :py:meth:`APIClient.api_url`
            params: see :py:meth:`requests.Session.request`
            json: the payload, pydantic models are converted with :py:func:`to_payload`
            headers: see :py:meth:`requests.Session.request`, content-type defaults to application/json if not set
            timeout: see :py:meth:`drogue_client.clients.context_client.ContextHTTPClient.request`
            provided_token: a bearer token used for this request instead of the token provider's credentials
            authenticated: if False, the request is sent without any credentials
            error_handling: error handling config; if set to False, errors won't be automatically handled
            kwargs: passed to :py:meth:`requests.Session.request`
        """
        if headers:
            headers["content-type"] = headers.get("content-type") or headers.get("Content-Type") or "application/json"
        else:
            headers = {"content-type": "application/json"}
        if provided_token is not None:
            headers["Authorization"] = f"Bearer {provided_token}"
        if not authenticated:
            kwargs["auth"] = _anonymous

        response = self.context.client.request(
            method=method,
            url=url,
            params=params,
            json=to_payload(json),
            headers=headers,
            timeout=timeout,
            **kwargs,
        )
        raise_drogue_api_error(response, error_handling)
        return response

    def _unexpected(self, response: Response, error_handling: ErrorHandlingConfig | None = None) -> NoReturn:
        raise_drogue_api_error(response, error_handling)
        # a status code which isn't an error, but not one this operation returns either
        raise UnexpectedResponseError(response=response)

    def read(
        self,
        url: str,
        target: type[T] | Any,  # noqa: ANN401
        error_handling: ErrorHandlingConfig | None = None,
        **kwargs,
    ) -> T | None:
        """GET a resource, ``None`` if it does not exist.

        Args:
            url: the url of the resource
            target: the type to decode the response as
            error_handling: used for responses other than 200 and 404
            kwargs: passed to :py:meth:`APIClient.api_request`
        """
        response = self.api_request("GET", url, error_handling=False, **kwargs)
        LOGGER.debug("Eval get response: %s", response.status_code)
        if response.status_code == requests.codes.ok:
            return parse_response(response, target)
        if response.status_code == requests.codes.not_found:
            return None
        return self._unexpected(response, error_handling)

    def update(
        self,
        url: str,
        payload: Any = None,  # noqa: ANN401
        error_handling: ErrorHandlingConfig | None = None,
        **kwargs,
    ) -> bool:
        """PUT the payload, False if the resource does not exist."""
        response = self.api_request("PUT", url, json=payload, error_handling=False, **kwargs)
        LOGGER.debug("Eval update response: %s", response.status_code)
        if response.status_code in (requests.codes.ok, requests.codes.accepted, requests.codes.no_content):
            return True
        if response.status_code == requests.codes.not_found:
            return False
        return self._unexpected(response, error_handling)

    def delete(self, url: str, error_handling: ErrorHandlingConfig | None = None, **kwargs) -> bool:
        """DELETE a resource, False if it did not exist."""
        response = self.api_request("DELETE", url, error_handling=False, **kwargs)
        LOGGER.debug("Eval delete response: %s", response.status_code)
        if response.status_code in (requests.codes.ok, requests.codes.no_content):
            return True
        if response.status_code == requests.codes.not_found:
            return False
        return self._unexpected(response, error_handling)

    def create(
        self,
        url: str,
        payload: Any = None,  # noqa: ANN401
        target: type[T] | Any = Any,  # noqa: ANN401
        error_handling: ErrorHandlingConfig | None = None,
        **kwargs,
    ) -> T | None:
        """POST the payload.

        Returns:
            None when the request was accepted without content (201, 202),
            the decoded body for a 200 response
        """
        response = self.api_request("POST", url, json=payload, error_handling=False, **kwargs)
        LOGGER.debug("Eval create response: %s", response.status_code)
        if response.status_code in (requests.codes.created, requests.codes.accepted):
            return None
        if response.status_code == requests.codes.ok:
            return parse_response(response, target) if response.content else None
        return self._unexpected(response, error_handling)
