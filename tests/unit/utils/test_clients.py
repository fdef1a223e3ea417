from drogue_client.utils.clients import build_api_url, build_url


def test_build_url():
    assert build_url("https://api.example.com", "a", "b") == "https://api.example.com/a/b"
    assert build_url("https://api.example.com", "a/b", "c d", "ä") == "https://api.example.com/a%2Fb/c%20d/%C3%A4"
    assert build_url("https://api.example.com", "apps", "") == "https://api.example.com/apps"


def test_build_api_url():
    assert (
        build_api_url("https://api.example.com", "registry", "v1alpha1", "apps", "my-app")
        == "https://api.example.com/api/registry/v1alpha1/apps/my-app"
    )
    assert (
        build_api_url("https://api.example.com", "tokens", "v1alpha1") == "https://api.example.com/api/tokens/v1alpha1"
    )
