"""Util functions for the API clients."""

from __future__ import annotations

from functools import cache
from urllib.parse import quote


def build_url(url: str, *segments: str) -> str:
    """Appends the path segments to the base url.

    Every segment is percent encoded on its own, so a ``/`` inside a name
    becomes ``%2F`` instead of a new path segment. Empty segments are skipped.
    """
    return url + "/" + "/".join(quote(segment, safe="") for segment in segments if segment)


@cache
def build_api_url(url: str, api_name: str, api_version: str, *segments: str) -> str:
    """Cached function for building the api URLs, ``{url}/api/{api_name}/{api_version}/{segments}``."""
    return build_url(url, "api", api_name, api_version, *segments)
