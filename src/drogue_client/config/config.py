"""Classes and logic for the Configuration."""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

from drogue_client.config.config_types import Host
from drogue_client.config.token_provider import TOKEN_PROVIDER_MAPPING, TokenProvider
from drogue_client.errors.config import (
    MissingCredentialsConfigError,
    MissingDrogueHostError,
    TokenProviderConfigError,
)
from drogue_client.utils.config import (
    cfg_files,
    check_init,
    get_environment_variable_config,
    merge_dicts,
)

if TYPE_CHECKING:
    from os import PathLike

    import requests

# compatibility for python version < 3.11
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

LOGGER = logging.getLogger(__name__)


class Config:
    """Class for Configuration options."""

    def __init__(
        self,
        requests_ca_bundle: PathLike[str] | str | None = None,
        rich_traceback: bool = False,
        debug: bool = False,
        requests_session: requests.Session | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize the configuration.

        Args:
            requests_ca_bundle: a path to a CA bundle if :py:mod:`requests` needs custom certificates to work
                e.g. in a corporate network or with a self-signed Drogue Cloud installation
            rich_traceback: enables a prettier traceback provided by the module `rich` See: https://rich.readthedocs.io/en/stable/traceback.html
            debug: enables debug logging of every request
            requests_session (requests.Session): Overwrite the default used requests.Session.
            max_workers: the number of threads used to fetch multiple devices at once,
                None uses the default of :py:class:`concurrent.futures.ThreadPoolExecutor`
        """
        self.requests_ca_bundle = os.fspath(requests_ca_bundle) if requests_ca_bundle else None
        self.rich_traceback = bool(rich_traceback)
        self.debug = bool(debug)
        self.requests_session = requests_session
        self.max_workers = int(max_workers) if max_workers is not None else None

    def __repr__(self) -> str:
        return "<" + self.__class__.__name__ + "(" + self.__dict__.__str__() + ")>"


def _read_config_sources(env: bool = True) -> dict:
    """Merges the config files in :py:func:`cfg_files` order and the environment variables, the later ones win.

    Files which don't exist are skipped, unreadable files are skipped with a warning.
    """
    config: dict = {}
    for cfg_file in cfg_files():
        try:
            with cfg_file.open("rb") as cfg_fd:
                config = merge_dicts(config, tomllib.load(cfg_fd))
        except FileNotFoundError:
            continue
        except OSError as e:
            LOGGER.warning("Skipping the config file %s: %s", cfg_file, e)
    if env:
        config = merge_dicts(config, get_environment_variable_config())
    return config


def _find_token_provider(credentials: dict) -> str | None:
    """Returns the name of the last token provider table in the credentials."""
    return next((k for k in reversed(credentials) if k in TOKEN_PROVIDER_MAPPING), None)


MISSING_TP_ERROR = TokenProviderConfigError(
    "To authenticate with Drogue Cloud you need a TokenProvider. The token provider can be configured either via"
    " the configuration file or the token_provider DrogueContext parameter."
)


def _profile_tables(config: dict, profile: str | None) -> tuple[dict, dict]:
    """Returns the ``credentials`` and ``config`` tables of the profile, empty ones without a profile."""
    if profile is None:
        profile = config.get("profile")
    if profile in ("config", "credentials"):
        msg = f"Profile name can't be {profile}"
        raise AttributeError(msg)
    if not profile or not isinstance(table := config.get(profile), dict):
        return {}, {}
    return table.get("credentials", {}), table.get("config", {})


def _resolve_credentials(default: dict, override: dict) -> dict:
    """Resolves the host and the last defined token provider, the profile's values win."""
    if not (domain := override.get("domain", default.get("domain"))):
        raise MissingDrogueHostError
    if not (token_provider_name := _find_token_provider(override) or _find_token_provider(default)):
        raise MISSING_TP_ERROR

    credentials = {"domain": domain}
    if (scheme := override.get("scheme", default.get("scheme"))) is not None:
        credentials["scheme"] = scheme
    credentials[token_provider_name] = merge_dicts(
        default.get(token_provider_name), override.get(token_provider_name)
    )
    return credentials


def get_config_dict(profile: str | None = None, env: bool = True, require_credentials: bool = True) -> dict | None:
    """Loads config from the config files and environment variables.

    Profiles make configs like this possible:

    .. code-block:: toml

        [config]
        debug = false

        [sandbox.config]
        debug = true

    Where 'sandbox.config' will be merged over 'config'
    if the profile is set to sandbox.

    Args:
        profile: The profile to use, if None the default profile is used
        env: Whether to load the environment variables
        require_credentials: if False the credentials are neither checked nor returned,
            used when the caller supplies its own token provider

    Returns:
        None if there is no configuration at all
    """
    config = _read_config_sources(env=env)
    if not config:
        return None
    profile_credentials, profile_config = _profile_tables(config, profile)

    return_config = {}
    if merged_config := merge_dicts(config.get("config", {}), profile_config):
        return_config["config"] = merged_config
    if require_credentials:
        return_config["credentials"] = _resolve_credentials(config.get("credentials", {}), profile_credentials)
    return return_config


def parse_credentials_config(config_dict: dict | None) -> TokenProvider:
    """Creates the token provider from the ``credentials`` table.

    The table holds ``domain``, the optional ``scheme`` and one token provider table,
    a bare value is shorthand for a table with a single entry of the same name,
    e.g. ``token = "..."`` for ``token = {token = "..."}``.
    """
    if config_dict is None or not (credentials := config_dict.get("credentials")):
        raise MissingCredentialsConfigError
    credentials = dict(credentials)
    if not (domain := credentials.pop("domain", None)):
        raise MissingDrogueHostError
    host = Host(domain, credentials.pop("scheme", None))

    if not credentials:
        raise MISSING_TP_ERROR
    tp_name, tp_config = next(reversed(credentials.items()))
    if not (token_provider_class := TOKEN_PROVIDER_MAPPING.get(tp_name)):
        msg = f"The token provider implementation {tp_name} does not exist."
        raise TokenProviderConfigError(msg)
    if not isinstance(tp_config, dict):
        tp_config = {} if tp_config is None else {tp_name: tp_config}
    return token_provider_class(**check_init(token_provider_class, "credentials", {"host": host, **tp_config}))


def parse_general_config(config_dict: dict | None = None) -> Config:
    """Parses the config dictionary and returns a Config object."""
    if config_dict is not None and (general_config := config_dict.get("config")):
        return Config(**check_init(Config, "config", general_config))
    return Config()
