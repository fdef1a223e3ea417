import pytest

from drogue_client.errors.meta import DrogueAPIError
from drogue_client.errors.service import (
    ConflictError,
    NotAuthorizedError,
    PreconditionFailedError,
    ResponseSyntaxError,
    UnexpectedResponseError,
)
from drogue_client.resources.application import Application
from drogue_client.resources.device import Device
from drogue_client.resources.labels import Eq, Exists
from drogue_client.resources.meta import NonScopedMetadata, ScopedMetadata
from drogue_client.utils.clients import build_api_url
from tests.unit.mocks import TEST_HOST


def registry_url(*segments: str) -> str:
    return build_api_url(TEST_HOST.url, "registry", "v1alpha1", *segments)


def device_json(name: str, **spec) -> dict:
    return {"metadata": {"application": "my-app", "name": name}, "spec": spec}


def test_get_app(test_context_mock, drogue_token):
    test_context_mock.mock_adapter.register_uri(
        "GET",
        registry_url("apps", "my-app"),
        json={"metadata": {"name": "my-app", "resourceVersion": "1"}, "spec": {"foo": {}}},
    )

    app = test_context_mock.registry.get_app("my-app")

    assert isinstance(app, Application)
    assert app.name == "my-app"
    assert app.metadata.resource_version == "1"
    assert app.spec == {"foo": {}}
    assert test_context_mock.mock_adapter.last_request.headers["Authorization"] == f"Bearer {drogue_token}"


def test_get_app_not_found(test_context_mock):
    test_context_mock.mock_adapter.register_uri("GET", registry_url("apps", "my-app"), status_code=404)
    assert test_context_mock.registry.get_app("my-app") is None


def test_names_are_percent_encoded(test_context_mock):
    test_context_mock.mock_adapter.register_uri("GET", registry_url("apps", "bar/baz"), status_code=404)

    assert test_context_mock.registry.get_app("bar/baz") is None
    assert test_context_mock.mock_adapter.last_request.url == TEST_HOST.url + "/api/registry/v1alpha1/apps/bar%2Fbaz"


def test_get_app_invalid_response(test_context_mock):
    test_context_mock.mock_adapter.register_uri("GET", registry_url("apps", "my-app"), text="<html>")
    with pytest.raises(ResponseSyntaxError, match="not valid JSON"):
        test_context_mock.registry.get_app("my-app")

    test_context_mock.mock_adapter.register_uri("GET", registry_url("apps", "my-app"), json={"spec": {}})
    with pytest.raises(ResponseSyntaxError, match="not a valid Application"):
        test_context_mock.registry.get_app("my-app")


def test_get_app_errors(test_context_mock):
    test_context_mock.mock_adapter.register_uri(
        "GET",
        registry_url("apps", "my-app"),
        status_code=401,
        json={"error": "NotAuthorized", "message": "Missing credentials"},
    )
    with pytest.raises(NotAuthorizedError) as exc_info:
        test_context_mock.registry.get_app("my-app")
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Missing credentials"

    test_context_mock.mock_adapter.register_uri("GET", registry_url("apps", "my-app"), status_code=500, text="boom")
    with pytest.raises(DrogueAPIError) as exc_info:
        test_context_mock.registry.get_app("my-app")
    assert exc_info.type is DrogueAPIError
    assert exc_info.value.error is None
    assert exc_info.value.status_code == 500

    # a success status, but not one a read returns
    test_context_mock.mock_adapter.register_uri("GET", registry_url("apps", "my-app"), status_code=201)
    with pytest.raises(UnexpectedResponseError):
        test_context_mock.registry.get_app("my-app")


def test_list_apps(test_context_mock):
    test_context_mock.mock_adapter.register_uri(
        "GET",
        registry_url("apps"),
        json=[{"metadata": {"name": "foo"}}, {"metadata": {"name": "bar"}}],
    )

    apps = test_context_mock.registry.list_apps()
    assert [app.name for app in apps] == ["foo", "bar"]
    assert test_context_mock.mock_adapter.last_request.qs == {}

    test_context_mock.registry.list_apps(labels=Eq("zone", "europe") + Exists("power"))
    assert test_context_mock.mock_adapter.last_request.qs == {"labels": ["zone=europe,power"]}

    test_context_mock.registry.list_apps(labels=["zone=europe"])
    assert test_context_mock.mock_adapter.last_request.qs == {"labels": ["zone=europe"]}


def test_create_app(test_context_mock):
    test_context_mock.mock_adapter.register_uri("POST", registry_url("apps"), status_code=201)

    assert test_context_mock.registry.create_app(Application(metadata=NonScopedMetadata(name="my-app"))) is None

    request = test_context_mock.mock_adapter.last_request
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/json"
    assert request.json()["metadata"]["name"] == "my-app"
    assert "uid" not in request.json()["metadata"]


def test_create_app_conflict(test_context_mock):
    test_context_mock.mock_adapter.register_uri(
        "POST",
        registry_url("apps"),
        status_code=409,
        json={"error": "AlreadyExists", "message": "Application my-app already exists"},
    )
    with pytest.raises(ConflictError) as exc_info:
        test_context_mock.registry.create_app(Application.new("my-app"))
    assert exc_info.value.error == "AlreadyExists"
    assert exc_info.value.message == "Application my-app already exists"


def test_update_app(test_context_mock):
    app = Application(metadata=NonScopedMetadata(name="my-app", resource_version="3"))
    adapter = test_context_mock.mock_adapter

    adapter.register_uri("PUT", registry_url("apps", "my-app"), status_code=204)
    assert test_context_mock.registry.update_app(app) is True
    assert adapter.last_request.json()["metadata"]["resourceVersion"] == "3"

    adapter.register_uri("PUT", registry_url("apps", "my-app"), status_code=404)
    assert test_context_mock.registry.update_app(app) is False

    adapter.register_uri(
        "PUT",
        registry_url("apps", "my-app"),
        status_code=412,
        json={"error": "PreconditionFailed", "message": "Resource version mismatch"},
    )
    with pytest.raises(PreconditionFailedError):
        test_context_mock.registry.update_app(app)


def test_delete_app(test_context_mock):
    adapter = test_context_mock.mock_adapter
    adapter.register_uri("DELETE", registry_url("apps", "my-app"), status_code=204)
    assert test_context_mock.registry.delete_app("my-app") is True

    adapter.register_uri("DELETE", registry_url("apps", "my-app"), status_code=404)
    assert test_context_mock.registry.delete_app("my-app") is False


def test_list_devices(test_context_mock):
    adapter = test_context_mock.mock_adapter
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices"), json=[device_json("foo")])

    devices = test_context_mock.registry.list_devices("my-app", labels=Eq("type", "sensor"))

    assert [d.name for d in devices] == ["foo"]
    assert devices[0].application == "my-app"
    assert adapter.last_request.qs == {"labels": ["type=sensor"]}

    adapter.register_uri("GET", registry_url("apps", "other-app", "devices"), status_code=404)
    assert test_context_mock.registry.list_devices("other-app") is None


def test_device_crud(test_context_mock):
    adapter = test_context_mock.mock_adapter
    device = Device(metadata=ScopedMetadata(application="my-app", name="my-device"))

    adapter.register_uri("POST", registry_url("apps", "my-app", "devices"), status_code=201)
    test_context_mock.registry.create_device(device)
    assert adapter.last_request.json()["metadata"]["application"] == "my-app"
    assert adapter.last_request.json()["metadata"]["name"] == "my-device"

    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "my-device"), json=device_json("my-device"))
    assert test_context_mock.registry.get_device("my-app", "my-device").name == "my-device"

    adapter.register_uri("PUT", registry_url("apps", "my-app", "devices", "my-device"), status_code=200)
    assert test_context_mock.registry.update_device(device) is True

    adapter.register_uri("DELETE", registry_url("apps", "my-app", "devices", "my-device"), status_code=200)
    assert test_context_mock.registry.delete_device("my-app", "my-device") is True


def test_get_devices(test_context_mock):
    adapter = test_context_mock.mock_adapter
    for name in ("a", "b"):
        adapter.register_uri("GET", registry_url("apps", "my-app", "devices", name), json=device_json(name))
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "missing"), status_code=404)

    devices = test_context_mock.registry.get_devices("my-app", ["a", "missing", "b"], max_workers=2)

    assert sorted(d.name for d in devices) == ["a", "b"]
    assert test_context_mock.registry.get_devices("my-app", []) == []


def test_get_devices_error(test_context_mock):
    adapter = test_context_mock.mock_adapter
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "a"), json=device_json("a"))
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "b"), status_code=503)

    with pytest.raises(DrogueAPIError):
        test_context_mock.registry.get_devices("my-app", ["a", "b"])


def test_get_device_and_gateways(test_context_mock):
    adapter = test_context_mock.mock_adapter
    adapter.register_uri(
        "GET",
        registry_url("apps", "my-app", "devices", "my-device"),
        json=device_json("my-device", gatewaySelector={"matchNames": ["gw1", "gw2"]}),
    )
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "gw1"), json=device_json("gw1"))
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "gw2"), status_code=404)

    device, gateways = test_context_mock.registry.get_device_and_gateways("my-app", "my-device")

    assert device.name == "my-device"
    assert [gw.name for gw in gateways] == ["gw1"]


def test_get_device_and_gateways_without_selector(test_context_mock):
    adapter = test_context_mock.mock_adapter
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "plain"), json=device_json("plain"))
    adapter.register_uri(
        "GET",
        registry_url("apps", "my-app", "devices", "broken"),
        json=device_json("broken", gatewaySelector={"matchNames": "gw1"}),
    )
    adapter.register_uri("GET", registry_url("apps", "my-app", "devices", "missing"), status_code=404)

    assert test_context_mock.registry.get_device_and_gateways("my-app", "plain")[1] == []
    assert test_context_mock.registry.get_device_and_gateways("my-app", "broken")[1] == []
    assert test_context_mock.registry.get_device_and_gateways("my-app", "missing") is None
