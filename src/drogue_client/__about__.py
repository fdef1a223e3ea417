"""Drogue client version."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("drogue-client")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
