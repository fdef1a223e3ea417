"""Error handling configuration for DrogueAPIErrors."""

from __future__ import annotations

import logging
from typing import Literal

import requests

from drogue_client.errors.meta import DrogueAPIError
from drogue_client.errors.service import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotAuthorizedError,
    PreconditionFailedError,
    ServiceUnavailableError,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_STATUS_MAPPING: dict[int, type[DrogueAPIError]] = {
    400: BadRequestError,
    401: NotAuthorizedError,
    403: ForbiddenError,
    409: ConflictError,
    412: PreconditionFailedError,
    503: ServiceUnavailableError,
}
"""Maps HTTP status codes to exception classes, used when the error name is unknown."""

DEFAULT_ERROR_MAPPING: dict[str, type[DrogueAPIError]] = {
    "InvalidRequest": BadRequestError,
    "BadRequest": BadRequestError,
    "NotAuthorized": NotAuthorizedError,
    "Unauthorized": NotAuthorizedError,
    "Forbidden": ForbiddenError,
    "NotAllowed": ForbiddenError,
    "Conflict": ConflictError,
    "AlreadyExists": ConflictError,
    "PreconditionFailed": PreconditionFailedError,
    "ServiceUnavailable": ServiceUnavailableError,
}
"""This mapping maps the error names coming from the API to the drogue client classes."""


class ErrorHandlingConfig:
    """Configuration for drogue API error handling."""

    def __init__(
        self,
        api_error_mapping: dict[str | int, type[DrogueAPIError]] | type[DrogueAPIError] | None = None,
        info: str | None = None,
        **kwargs,
    ):
        """Configuration for drogue API error handling.

        Args:
            api_error_mapping: Either a dictionary which maps either status codes
                or error names to python Exception classes,
                or just a python exception class to use it for every HTTP Error.
                Status codes below 400, which do not raise an HTTP Error, are raised too if they are in the mapping
            info: additional information about the error, passed to the constructor of the Exception
            kwargs: will be passed to the constructor of the Exception
        """
        self.api_error_mapping = api_error_mapping
        self.kwargs = kwargs
        self.info = info

    def _error_body(self, response: requests.Response) -> dict:
        """Reads the ``{"error": ..., "message": ...}`` body of a service error, empty if there is none."""
        try:
            error_response = response.json()
        except requests.exceptions.JSONDecodeError:
            LOGGER.debug("Error response from %s has no JSON body", response.url)
            return {}
        if not isinstance(error_response, dict):
            return {}
        return {key: value for key in ("error", "message") if (value := error_response.get(key))}

    def get_exception_class(self, response: requests.Response) -> type[DrogueAPIError] | None:  # noqa: PLR0911
        """Returns the python exception class for the response."""
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError:
            en = self._error_body(response).get("error")
            if self.api_error_mapping is not None:
                if isinstance(self.api_error_mapping, dict):
                    if status_exception := self.api_error_mapping.get(response.status_code):
                        return status_exception
                    if en and (exc := self.api_error_mapping.get(en)):
                        return exc
                else:
                    return self.api_error_mapping
            if en and (exc := DEFAULT_ERROR_MAPPING.get(en)):
                return exc
            if exc := DEFAULT_STATUS_MAPPING.get(response.status_code):
                return exc
            return DrogueAPIError
        else:
            if isinstance(self.api_error_mapping, dict) and (exc := self.api_error_mapping.get(response.status_code)):
                return exc
        return None

    def get_exception(self, response: requests.Response) -> DrogueAPIError | None:
        """Returns exception determined by :py:meth:`ErrorHandlingConfig.get_exception_class` filled out with the response and kwargs."""  # noqa: E501
        if exc := self.get_exception_class(response):
            error_body = {} if response.ok else self._error_body(response)
            return exc(response=response, info=self.info, **{**self.kwargs, **error_body})
        return None


def raise_drogue_api_error(
    response: requests.Response,
    error_handling: ErrorHandlingConfig | Literal[False] | None = None,
):
    """Raise a drogue API error through the ErrorHandlingConfig.

    Convenience function around ErrorHandlingConfig.get_exception.
    """
    if error_handling is not False and (exc := (error_handling or ErrorHandlingConfig()).get_exception(response)):
        raise exc
