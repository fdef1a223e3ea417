"""HTTP client implementation, the requests session of a :py:class:`~drogue_client.config.context.DrogueContext`."""

from __future__ import annotations

import functools
import logging
import numbers
import os
import time
import typing
from pathlib import Path
from typing import TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from os import PathLike

    from requests import Response


DEFAULT_TIMEOUT = (60, None)
LOGGER = logging.getLogger(__name__)


def retry(times: int, exceptions: type[Exception] | tuple[type[Exception], ...]) -> typing.Callable:
    """Retry Decorator.

    Retries the wrapped function/method `times` times if one of the ``exceptions`` is raised,
    the last attempt raises the exception to the caller.

    Args:
        times: The number of retries
        exceptions: exception class(es) that trigger a retry attempt
    """

    def decorator(func: typing.Callable) -> typing.Callable:
        @functools.wraps(func)
        def newfn(*args, **kwargs) -> typing.Any:  # noqa: ANN401
            attempt = 0
            while attempt < times:
                try:
                    return func(*args, **kwargs)
                except exceptions:  # noqa: PERF203
                    LOGGER.debug("Exception thrown when attempting to run %s, attempt %d of %d", func, attempt, times)
                    time.sleep(0.1)
                    attempt += 1
            return func(*args, **kwargs)

        return newfn

    return decorator


class ContextHTTPClient(requests.Session):
    """Requests Session with config and authentication applied."""

    def __init__(self, debug: bool = False, requests_ca_bundle: PathLike[str] | str | None = None) -> None:
        self.debug = debug
        super().__init__()
        if requests_ca_bundle is not None and Path(requests_ca_bundle).is_file():
            self.verify = os.fspath(requests_ca_bundle)

        self._counter = 0

    @retry(times=3, exceptions=requests.exceptions.ConnectionError)
    def request(self, method: str | bytes, url: str | bytes, *args, timeout=None, **kwargs) -> Response:  # noqa: ANN001
        """Make an HTTP request, see :py:meth:`requests.Session.request`.

        A numeric timeout is the read timeout, the connect timeout defaults to 60 seconds.
        """
        if self.debug:
            self._counter = count = self._counter + 1
            LOGGER.debug(f"(r{count}) Making {method!s} request to {url!s}")  # noqa: G004

        if isinstance(timeout, numbers.Number):
            timeout = (DEFAULT_TIMEOUT[0], timeout)
        elif timeout is None:
            timeout = DEFAULT_TIMEOUT

        response = super().request(method, url, *args, timeout=timeout, **kwargs)
        if self.debug:
            LOGGER.debug(
                f"(r{count}) Got response status={response.status_code}, "  # noqa: G004
                f"content_type={response.headers.get('content-type')}, "
                f"content_length={response.headers.get('content-length')}",
            )
        return response
