"""Knative integration of an application, delivering events to an HTTP endpoint."""

from __future__ import annotations

from pydantic import Field

from drogue_client.resources.conditions import Conditions
from drogue_client.resources.endpoint import ExternalEndpoint
from drogue_client.translator import Dialect, Section, dialect
from drogue_client.utils.serde import DrogueModel


@dialect(Section.SPEC, "knative")
class KnativeAppSpec(Dialect, DrogueModel):
    disabled: bool = False
    endpoint: ExternalEndpoint


@dialect(Section.STATUS, "knative")
class KnativeAppStatus(Dialect, DrogueModel):
    observed_generation: int = 0
    conditions: Conditions = Field(default_factory=Conditions)
