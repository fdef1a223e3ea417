from __future__ import annotations

from typing import TYPE_CHECKING
from unittest import mock

import pytest

from drogue_client.config.config import Config
from drogue_client.utils.config import CFG_FILE_NAME
from tests.unit.mocks import MOCK_ADAPTER, DrogueMockContext, MockTokenProvider

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture()
def drogue_token(request):
    """Generates a fake token that is the name of the test function + '_token'.

    This is useful to trace back a token to a test function.
    """
    return request.node.name + "_token"


@pytest.fixture()
def test_context_mock(drogue_token) -> Generator[DrogueMockContext, None, None]:
    """This fixture provides a context with default config, a :py:class:`~tests.unit.mocks.MockTokenProvider` and a :py:class:`requests_mock.Adapter`.

    Useful for mocking API responses. see :py:class:`~tests.unit.mocks.DrogueMockContext`.
    """  # noqa: E501
    yield DrogueMockContext(Config(), MockTokenProvider(token=drogue_token))
    MOCK_ADAPTER.reset()


@pytest.fixture()
def mock_config_location(tmp_path_factory, request) -> Generator[dict[Path, None], None, None]:
    """Mocks the locations where the config files are read and returns them.

    Can be used in tests like this:
    .. code-block:: python

       from drogue_client.config import config


       def test_xyz(mock_config_location):
           assert mock_config_location == config.cfg_files()  # true

    """
    paths = dict.fromkeys(
        [
            tmp_path_factory.mktemp(f"{request.node.name}_site_cfg").joinpath(CFG_FILE_NAME),
            tmp_path_factory.mktemp(f"{request.node.name}_user_cfg").joinpath(CFG_FILE_NAME),
        ],
    )
    with mock.patch("drogue_client.config.config.cfg_files", return_value=paths):
        yield paths
