"""Utils functions for the configuration.

The config directories/files.
The environment config.
Function to merge dictionaries.
And the function that checks if the kwargs for a __init__ are correct,
currently used for the :py:class:`drogue_client.config.config.Config`
and the token providers :py:mod:`drogue_client.config.token_provider`.
"""

from __future__ import annotations

import inspect
import os
import warnings
from functools import cache
from importlib.metadata import entry_points
from pathlib import Path
from typing import TYPE_CHECKING, Any

import platformdirs

from drogue_client.errors.config import DrogueConfigError

if TYPE_CHECKING:
    from drogue_client.config.token_provider import TokenProvider

ENVIRONMENT_VARIABLE_PREFIX = "DROGUE_"
CFG_FILE_NAME = "config.toml"


@cache
def _platformdirs() -> platformdirs.PlatformDirsABC:
    return platformdirs.PlatformDirs("drogue-client")


@cache
def cfg_files() -> dict[Path, None]:
    """Returns all the possible configuration file paths (cached).

    Returns a dict with the paths as keys, in the order they are merged.
    The first one is the system-wide config.
    """
    return {site_cfg_file(): None, **user_cfg_files()}


@cache
def user_cfg_files() -> dict[Path, None]:
    """Returns all possible user configuration files."""
    return {
        Path.home().joinpath(".drogue-client", CFG_FILE_NAME): None,
        Path.home().joinpath(".config", "drogue-client", CFG_FILE_NAME): None,
        _platformdirs().user_config_path.joinpath(CFG_FILE_NAME): None,
    }


@cache
def site_cfg_file() -> Path:
    """Returns the site_config_path from :py:mod:`platformdirs`."""
    return _platformdirs().site_config_path.joinpath(CFG_FILE_NAME)


def merge_dicts(a: dict, b: dict) -> dict:
    """Merges two nested dicts, values of ``b`` win."""
    if isinstance(a, dict) and isinstance(b, dict):
        for k in b:
            if k in a:
                a[k] = merge_dicts(a[k], b[k])
            else:
                a[k] = b[k]
        return a
    return b if b is not None else a


def get_environment_variable_config() -> dict:
    """Returns the `DROGUE_*` environment variables as a config dict.

    ``DROGUE_CONFIG__DEBUG=true`` becomes ``{"config": {"debug": True}}``.
    """
    env_dict: dict[str, Any] = {}
    for name, value in os.environ.items():
        if name.startswith(ENVIRONMENT_VARIABLE_PREFIX):
            parts = name[len(ENVIRONMENT_VARIABLE_PREFIX) :].lower().split("__")
            if len(parts) <= 1:
                if parts[0] == "profile":  # profile is a special case
                    if len(value) == 0:
                        value = None  # allow erasing via env variable  # noqa: PLW2901
                else:
                    warnings.warn(f"{name} is not a valid drogue client configuration environment variable.")
                    continue
            o = env_dict
            for cfg_part in parts[:-1]:
                if cfg_part not in o or not isinstance(o[cfg_part], dict):
                    o[cfg_part] = {}
                o = o[cfg_part]
            o[parts[-1]] = _try_convert_to_bool(value)
    return env_dict


def _try_convert_to_bool(value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, str) and value.lower() == "false":
        return False
    elif isinstance(value, str) and value.lower() == "true":  # noqa: RET505
        return True
    return value


@cache
def entry_point_token_provider() -> dict[str, type[TokenProvider]]:
    """Returns the token provider implementations registered via the ``drogue_client_token_provider`` entry points."""
    return {ep.name: ep.load() for ep in entry_points(group="drogue_client_token_provider")}


def check_init(
    init_class: type,
    config_path: str,
    kwargs: dict[str, Any],
) -> dict:
    """Checks if the supplied kwargs from the config dict are valid for the class to be instantiated.

    If a kwarg is of the wrong type it will try to be cast to the correct type.
    If this fails a :py:class:`DrogueConfigError` will be raised.
    If it succeeds it will still show a warning, that the value has been cast.

    Args:
        init_class: The class that will be instantiated with :py:attr:`kwargs`
        config_path: For the warnings/errors to show which config setting is invalid
            config.path + "." + invalid_kwarg_name
        kwargs: the kwargs to check

    Returns:
        valid_kwargs: dict
        the kwargs that (were cast to) work for the instantiated class

    """
    valid_kwargs = {}
    for name, parameter in inspect.signature(init_class).parameters.items():
        conf_name = f"{config_path}.{name}"
        if name not in kwargs:
            if (
                parameter.kind not in (parameter.VAR_KEYWORD, parameter.VAR_POSITIONAL)
                and parameter.default is parameter.empty
            ):
                msg = f"{conf_name} is missing to create {init_class!s}."
                raise DrogueConfigError(msg)
            continue
        value = kwargs.pop(name)
        annotation = parameter.annotation
        # string annotations (from __future__) can't be checked
        if annotation is parameter.empty or isinstance(annotation, str) or isinstance(value, annotation):
            valid_kwargs[name] = value
            continue
        try:
            valid_kwargs[name] = annotation(value)
        except (TypeError, ValueError) as e:
            msg = (
                f"To initialize {init_class!s}, the config option {conf_name} needs to be of type"
                f" {annotation!s}, but it is type {type(value)!s}"
            )
            raise DrogueConfigError(msg) from e
        warnings.warn(
            f"{conf_name} was type {type(value)!s} but has been cast to"
            f" {annotation!s}, this was needed to instantiate {init_class!s}.",
        )
    for name in kwargs:
        warnings.warn(f"{config_path}.{name} is not a valid config option for {init_class!s}")
    return valid_kwargs
