"""Base classes for all drogue client exceptions/errors."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import requests


class DrogueClientError(Exception):
    """Base class of every error raised by the drogue client.

    Catch all drogue client errors:

    .. code-block:: python

        try:
            ctx.registry.get_app("my-app")
        except DrogueClientError:
            print("Some drogue client error")

    """


class DrogueAPIError(DrogueClientError):
    """Parent class for all errors reported by the Drogue Cloud services.

    All "child" errors can be caught with this parent class e.g.:

    .. code-block:: python

        try:
            ctx.registry.create_app(app)  # could raise ConflictError or ForbiddenError
        except DrogueAPIError as e:
            print(e.error, e.message)

    """

    message = "Details about the Drogue API error:\n"
    error: str | None = None
    """The error name from the service's error body, None if the body has none."""

    def __init__(self, response: requests.Response | None = None, info: str | None = None, **kwargs) -> None:
        """Initialize a Drogue API error.

        Args:
            response: requests Response where the API error occurred
            info: add additional information to this error
            kwargs: error specific parameters which may contain more information about the error,
                ``error`` and ``message`` are filled from the service's error body
        """
        self.response = response
        self.kwargs = kwargs
        self.info = info
        self.error = self.kwargs.get("error")
        if api_message := self.kwargs.get("message"):
            # shown as the message, not again as a parameter
            self.message = api_message
            del self.kwargs["message"]
        term_size = shutil.get_terminal_size().columns
        msg = self.message
        if self.info:
            msg += f"\n{self.info}\n"
        else:
            msg += "\n"
        request_sep = "-" * int((term_size - 7) / 2)
        msg += request_sep + "REQUEST" + request_sep + "\n"
        if self.response is not None and self.response.request is not None:
            if self.response.request.method:
                msg += "METHOD = " + self.response.request.method + "\n"
            msg += "ENDPOINT = " + self.response.request.path_url + "\n"

        if len(self.kwargs) > 0:
            param_sep = "-" * int((term_size - 10) / 2)
            msg += param_sep + "PARAMETERS" + param_sep + "\n"
            for k, v in self.kwargs.items():
                msg += str(k) + " = " + str(v) + "\n"

        response_sep = "-" * int((term_size - 8) / 2)
        msg += response_sep + "RESPONSE" + response_sep + "\n"

        if self.response is not None:
            msg += f"STATUS = {self.response.status_code}\n"

        super().__init__(msg)

    @property
    def status_code(self) -> int | None:
        """The HTTP status code of the response, if there was one."""
        return self.response.status_code if self.response is not None else None

    def __dir__(self):
        yield from super().__dir__()
        yield from self.kwargs.keys()

    def __getattr__(self, name: str):
        if name in ("kwargs", "response", "info"):
            # not yet set, avoid recursing into __getattr__
            raise AttributeError(name)
        return self.kwargs.get(name) or super().__getattribute__(name)
