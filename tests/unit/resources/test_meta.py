from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from drogue_client.resources.application import Application
from drogue_client.resources.device import Device
from drogue_client.resources.meta import NonScopedMetadata, ScopedMetadata


def test_metadata_from_json():
    app = Application.from_json(
        {
            "metadata": {
                "name": "my-app",
                "uid": "4e185ea6-7c26-11eb-a319-d45d6455d210",
                "creationTimestamp": "2020-01-01T00:00:00Z",
                "generation": 3,
                "resourceVersion": "12",
                "finalizers": ["foo"],
                "labels": {"zone": "europe"},
                "annotations": {"note": "a"},
            },
            "spec": {"core": {"foo": "bar"}},
        }
    )
    assert app.name == "my-app"
    assert app.metadata.uid == "4e185ea6-7c26-11eb-a319-d45d6455d210"
    assert app.metadata.creation_timestamp == datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert app.metadata.generation == 3
    assert app.metadata.resource_version == "12"
    assert app.metadata.deletion_timestamp is None
    assert app.spec == {"core": {"foo": "bar"}}
    assert app.status == {}


def test_metadata_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        Application.from_json({"metadata": {"name": "my-app", "color": "blue"}})


def test_scoped_metadata_requires_application():
    with pytest.raises(ValidationError):
        Device.from_json({"metadata": {"name": "my-device"}})
    device = Device.from_json({"metadata": {"name": "my-device", "application": "my-app"}})
    assert device.name == "my-device"
    assert device.application == "my-app"


def test_new_resources():
    app = Application.new("my-app")
    assert isinstance(app.metadata, NonScopedMetadata)
    assert app.metadata.creation_timestamp > datetime(2020, 1, 1, tzinfo=timezone.utc)

    device = Device.new("my-app", "my-device")
    assert isinstance(device.metadata, ScopedMetadata)
    assert device.application == "my-app"
    assert device.name == "my-device"


def test_to_json_omits_defaults():
    app = Application(metadata=NonScopedMetadata(name="my-app"))
    metadata = app.to_json()["metadata"]
    assert metadata["name"] == "my-app"
    assert "uid" not in metadata
    assert "creationTimestamp" not in metadata
    assert "generation" not in metadata

    app.metadata.labels["zone"] = "europe"
    app.metadata.resource_version = "3"
    metadata = app.to_json()["metadata"]
    assert metadata["resourceVersion"] == "3"
    assert metadata["labels"] == {"zone": "europe"}


def test_finalizers():
    meta = NonScopedMetadata(name="my-app")
    assert meta.ensure_finalizer("foo") is True
    assert meta.ensure_finalizer("foo") is False
    assert meta.finalizers == ["foo"]

    meta.finalizers.append("bar")
    meta.finalizers.append("foo")
    assert meta.remove_finalizer("foo") is True
    assert meta.finalizers == ["bar"]
    assert meta.remove_finalizer("foo") is False


def test_labels():
    meta = NonScopedMetadata(name="my-app", labels={"flag": "True", "other": "yes", "empty": ""})
    assert meta.has_label("empty")
    assert not meta.has_label("missing")
    assert meta.has_label_flag("flag")
    assert not meta.has_label_flag("other")
    assert not meta.has_label_flag("empty")
    assert not meta.has_label_flag("missing")
