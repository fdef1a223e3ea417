"""Errors reported by the Drogue Cloud services, mostly derived from the HTTP status code."""

from __future__ import annotations

from drogue_client.errors.meta import DrogueAPIError, DrogueClientError


class BadRequestError(DrogueAPIError):
    """The request was rejected as invalid (400)."""

    message = "The request was rejected as invalid."


class NotAuthorizedError(DrogueAPIError):
    """Missing or invalid credentials (401)."""

    message = "The request is not authorized, check your credentials."


class ForbiddenError(DrogueAPIError):
    """The credentials are valid, but not allowed to perform the operation (403)."""

    message = "You are not allowed to perform this operation."


class ConflictError(DrogueAPIError):
    """The resource already exists or was modified concurrently (409)."""

    message = "The request conflicts with the current state of the resource."


class PreconditionFailedError(DrogueAPIError):
    """A precondition, e.g. the resource version or uid, did not match (412)."""

    message = "A precondition of the request did not match."


class ServiceUnavailableError(DrogueAPIError):
    """The service is temporarily not available (503)."""

    message = "The service is currently not available."


class UnexpectedResponseError(DrogueAPIError):
    """The service answered with a status code or payload the client did not expect."""

    message = "Unexpected response from the Drogue API."


class ResponseSyntaxError(DrogueClientError):
    """The response body could not be decoded into the expected type."""
