"""Conditions, the status reporting of resources, and their aggregation into a ``Ready`` condition."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import Field, RootModel, model_serializer

from drogue_client.translator import Dialect, Section, dialect
from drogue_client.utils.misc import utc_now
from drogue_client.utils.serde import DrogueModel

READY = "Ready"
"""Type of the aggregated condition."""

NON_READY_CONDITIONS = "NonReadyConditions"
"""Reason of the ``Ready`` condition when another condition is not ``True``."""


class Condition(DrogueModel):
    """A single condition, the status is one of ``True``, ``False`` or ``Unknown``."""

    type: str
    status: str = "Unknown"
    reason: str | None = None
    message: str | None = None
    last_transition_time: datetime

    @model_serializer(mode="wrap")
    def _serialize_with_status(self, handler) -> Any:  # noqa: ANN001,ANN401
        data = handler(self)
        # status is always written, also when "Unknown"
        if isinstance(data, dict):
            data.setdefault("status", self.status)
        return data


@dataclass
class ConditionStatus:
    """The new state of a condition, ``status`` None means ``Unknown``."""

    status: bool | None = None
    reason: str | None = None
    message: str | None = None

    @property
    def status_str(self) -> str:
        """The status as used in a :py:class:`Condition`."""
        if self.status is None:
            return "Unknown"
        return "True" if self.status else "False"


@dialect(Section.STATUS, "conditions")
class Conditions(Dialect, RootModel[list[Condition]]):
    """The list of conditions in the status of a resource, at most one per type."""

    root: list[Condition] = Field(default_factory=list)

    def __iter__(self):
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def get(self, condition_type: str) -> Condition | None:
        """Returns the condition of the given type, if present."""
        return next((c for c in self.root if c.type == condition_type), None)

    def update(self, condition_type: str, status: ConditionStatus) -> None:
        """Sets the state of a condition, adding it when it does not exist yet.

        The transition time only changes when the status value changes,
        reason and message are always replaced.
        """
        status_str = status.status_str
        if (condition := self.get(condition_type)) is None:
            self.root.append(
                Condition(
                    type=condition_type,
                    status=status_str,
                    reason=status.reason,
                    message=status.message,
                    last_transition_time=utc_now(),
                )
            )
            return
        if condition.status != status_str:
            condition.status = status_str
            condition.last_transition_time = utc_now()
        condition.reason = status.reason
        condition.message = status.message

    def aggregate_ready(self) -> None:
        """Sets the ``Ready`` condition from all other conditions.

        Ready is ``True`` if every other condition is ``True`` (also when there are none),
        otherwise it is ``False`` with the reason ``NonReadyConditions``.
        """
        if all(c.status == "True" for c in self.root if c.type != READY):
            self.update(READY, ConditionStatus(status=True))
        else:
            self.update(READY, ConditionStatus(status=False, reason=NON_READY_CONDITIONS))

    def clear_ready(self, condition_type: str) -> None:
        """Removes the condition and re-aggregates the ``Ready`` condition."""
        self.root = [c for c in self.root if c.type != condition_type]
        self.aggregate_ready()
