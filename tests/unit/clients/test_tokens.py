import pytest

from drogue_client.errors.service import UnexpectedResponseError
from drogue_client.utils.clients import build_api_url
from tests.unit.mocks import TEST_HOST


def tokens_url(*segments: str) -> str:
    return build_api_url(TEST_HOST.url, "tokens", "v1alpha1", *segments)


def test_get_tokens(test_context_mock):
    test_context_mock.mock_adapter.register_uri(
        "GET",
        tokens_url(),
        json=[
            {"created": "2022-01-01T00:00:00Z", "prefix": "drg_abc", "description": "ci"},
            {"created": "2022-02-01T00:00:00Z", "prefix": "drg_def"},
        ],
    )
    tokens = test_context_mock.tokens.get_tokens()
    assert [t.prefix for t in tokens] == ["drg_abc", "drg_def"]
    assert tokens[0].description == "ci"
    assert tokens[1].description is None


def test_create_token(test_context_mock):
    adapter = test_context_mock.mock_adapter
    adapter.register_uri("POST", tokens_url(), json={"token": "drg_abc_secret", "prefix": "drg_abc"})

    token = test_context_mock.tokens.create_token(description="for ci")

    assert token.token == "drg_abc_secret"  # noqa: S105
    assert token.prefix == "drg_abc"
    assert adapter.last_request.qs == {"description": ["for ci"]}

    test_context_mock.tokens.create_token()
    assert adapter.last_request.qs == {}


def test_create_token_without_body(test_context_mock):
    test_context_mock.mock_adapter.register_uri("POST", tokens_url(), status_code=201)
    with pytest.raises(UnexpectedResponseError):
        test_context_mock.tokens.create_token()


def test_delete_token(test_context_mock):
    adapter = test_context_mock.mock_adapter
    adapter.register_uri("DELETE", tokens_url("drg_abc"), status_code=204)
    adapter.register_uri("DELETE", tokens_url("drg_missing"), status_code=404)

    assert test_context_mock.tokens.delete_token("drg_abc") is True
    assert test_context_mock.tokens.delete_token("drg_missing") is False
