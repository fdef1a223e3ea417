from datetime import datetime, timezone

from freezegun import freeze_time

from drogue_client.resources.application import Application
from drogue_client.resources.conditions import NON_READY_CONDITIONS, READY, Conditions, ConditionStatus
from drogue_client.translator import Decoded, Malformed


def test_update_adds_condition():
    conditions = Conditions()
    with freeze_time("2022-01-01T12:00:00Z"):
        conditions.update("Foo", ConditionStatus(status=True, reason="Reason", message="Message"))

    assert len(conditions) == 1
    condition = conditions.get("Foo")
    assert condition.status == "True"
    assert condition.reason == "Reason"
    assert condition.message == "Message"
    assert condition.last_transition_time == datetime(2022, 1, 1, 12, tzinfo=timezone.utc)
    assert conditions.get("Bar") is None


def test_update_only_moves_transition_time_on_status_change():
    conditions = Conditions()
    with freeze_time("2022-01-01T12:00:00Z"):
        conditions.update("Foo", ConditionStatus(status=True))
    with freeze_time("2022-01-02T12:00:00Z"):
        conditions.update("Foo", ConditionStatus(status=True, reason="Other", message="Changed"))

    condition = conditions.get("Foo")
    assert condition.last_transition_time == datetime(2022, 1, 1, 12, tzinfo=timezone.utc)
    assert condition.reason == "Other"
    assert condition.message == "Changed"

    with freeze_time("2022-01-03T12:00:00Z"):
        conditions.update("Foo", ConditionStatus(status=False))

    condition = conditions.get("Foo")
    assert condition.status == "False"
    assert condition.last_transition_time == datetime(2022, 1, 3, 12, tzinfo=timezone.utc)
    assert condition.reason is None
    assert condition.message is None
    assert len(conditions) == 1


def test_status_unknown():
    assert ConditionStatus().status_str == "Unknown"
    assert ConditionStatus(status=True).status_str == "True"
    assert ConditionStatus(status=False).status_str == "False"


def test_aggregate_ready():
    conditions = Conditions()
    conditions.aggregate_ready()
    assert conditions.get(READY).status == "True"

    conditions.update("Foo", ConditionStatus(status=True))
    conditions.update("Bar", ConditionStatus(status=False))
    conditions.aggregate_ready()
    ready = conditions.get(READY)
    assert ready.status == "False"
    assert ready.reason == NON_READY_CONDITIONS

    conditions.update("Bar", ConditionStatus(status=True))
    conditions.aggregate_ready()
    ready = conditions.get(READY)
    assert ready.status == "True"
    assert ready.reason is None

    conditions.update("Baz", ConditionStatus())
    conditions.aggregate_ready()
    assert conditions.get(READY).status == "False"


def test_clear_ready():
    conditions = Conditions()
    conditions.update("Foo", ConditionStatus(status=True))
    conditions.update("Bar", ConditionStatus(status=False))
    conditions.aggregate_ready()
    assert conditions.get(READY).status == "False"

    conditions.clear_ready("Bar")

    assert conditions.get("Bar") is None
    assert conditions.get(READY).status == "True"
    assert [c.type for c in conditions] == ["Foo", READY]


def test_conditions_in_status_section():
    app = Application.from_json(
        {
            "metadata": {"name": "my-app"},
            "status": {
                "conditions": [
                    {"type": "KafkaReady", "status": "True", "lastTransitionTime": "2022-01-01T12:00:00Z"},
                    {"type": "Ready", "lastTransitionTime": "2022-01-01T13:00:00Z"},
                ]
            },
        }
    )
    outcome = app.section(Conditions)
    assert isinstance(outcome, Decoded)
    assert outcome.value.get("KafkaReady").status == "True"
    # a missing status is unknown
    assert outcome.value.get("Ready").status == "Unknown"

    def mark_unknown(conditions: Conditions) -> Conditions:
        conditions.update("Foo", ConditionStatus())
        return conditions

    app.update_section(Conditions, mark_unknown)

    written = app.status["conditions"]
    assert len(written) == 3
    # the status is always written, also when it is the default
    assert written[1] == {"type": "Ready", "status": "Unknown", "lastTransitionTime": "2022-01-01T13:00:00Z"}
    assert written[2]["type"] == "Foo"
    assert written[2]["status"] == "Unknown"
    assert "reason" not in written[2]
    assert "lastTransitionTime" in written[2]


def test_condition_requires_transition_time():
    app = Application.from_json({"metadata": {"name": "my-app"}, "status": {"conditions": [{"type": "Ready"}]}})
    assert isinstance(app.section(Conditions), Malformed)


def test_condition_always_writes_transition_time():
    conditions = Conditions()
    with freeze_time("1970-01-01T00:00:00Z"):
        conditions.update("Foo", ConditionStatus())
    assert conditions.to_section_value() == [
        {"type": "Foo", "status": "Unknown", "lastTransitionTime": "1970-01-01T00:00:00Z"}
    ]


def test_aggregate_ready_with_only_ready_left():
    conditions = Conditions()
    with freeze_time("2022-01-01T12:00:00Z"):
        conditions.update("A", ConditionStatus(status=False))
        conditions.update(READY, ConditionStatus(status=False))
    with freeze_time("2022-01-02T12:00:00Z"):
        conditions.clear_ready("A")

    assert [(c.type, c.status) for c in conditions] == [(READY, "True")]
    assert conditions.get(READY).last_transition_time == datetime(2022, 1, 2, 12, tzinfo=timezone.utc)
