"""Label selectors, rendered to the ``labels`` query parameter of the list operations.

.. code-block:: python

    selector = Eq("zone", "europe") + Exists("power")
    str(selector)  # 'zone=europe,power'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class Operation:
    """A single label requirement."""

    def __add__(self, other: Operation | LabelSelector) -> LabelSelector:
        return LabelSelector([self]) + other


@dataclass(frozen=True)
class Eq(Operation):
    label: str
    value: str

    def __str__(self) -> str:
        return f"{self.label}={self.value}"


@dataclass(frozen=True)
class NotEq(Operation):
    label: str
    value: str

    def __str__(self) -> str:
        return f"{self.label}!={self.value}"


@dataclass(frozen=True)
class In(Operation):
    label: str
    values: tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.label} in ({', '.join(self.values)})"


@dataclass(frozen=True)
class NotIn(Operation):
    label: str
    values: tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.label} notin ({', '.join(self.values)})"


@dataclass(frozen=True)
class Exists(Operation):
    label: str

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class NotExists(Operation):
    label: str

    def __str__(self) -> str:
        return f"!{self.label}"


@dataclass
class LabelSelector:
    """A conjunction of label requirements."""

    operations: list[Operation] = field(default_factory=list)

    def __add__(self, other: Operation | LabelSelector) -> LabelSelector:
        if isinstance(other, LabelSelector):
            return LabelSelector([*self.operations, *other.operations])
        return LabelSelector([*self.operations, other])

    def __str__(self) -> str:
        return ",".join(str(op) for op in self.operations)

    def to_query_parameters(self) -> list[tuple[str, str]]:
        """Returns the query parameters for a list request, empty if there are no operations."""
        if not self.operations:
            return []
        return [("labels", str(self))]


def labels_query(labels: LabelSelector | Operation | Iterable[str] | None) -> list[tuple[str, str]]:
    """Normalizes the different ways to pass labels to a list operation into query parameters.

    Strings are passed on as they are, e.g. ``["zone=europe", "power"]``.
    """
    if labels is None:
        return []
    if isinstance(labels, Operation):
        labels = LabelSelector([labels])
    if isinstance(labels, LabelSelector):
        return labels.to_query_parameters()
    if isinstance(labels, str):
        labels = [labels]
    if joined := ",".join(labels):
        return [("labels", joined)]
    return []
