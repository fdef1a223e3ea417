from drogue_client.resources.application import Application
from drogue_client.resources.conditions import Condition, Conditions, ConditionStatus
from drogue_client.resources.device import Device
from drogue_client.resources.meta import NonScopedMetadata, ScopedMetadata
from drogue_client.resources.resource import Resource

__all__ = [
    "Resource",
    "Application",
    "Device",
    "NonScopedMetadata",
    "ScopedMetadata",
    "Condition",
    "Conditions",
    "ConditionStatus",
]
