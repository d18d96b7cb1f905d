"""Vehicle intake inspection core: damage diagram, photos, checklist and fuel gauge."""

from .models.inspection import (
    DamageMarker,
    DamageSeverity,
    DamageType,
    DiagramView,
    InventoryCheckItem,
    VehicleBodyType,
    VehicleInspection,
)
from .orchestration.orchestrator import InspectionOrchestrator
from .session import create_inspection_session

__all__ = [
    "DamageMarker",
    "DamageSeverity",
    "DamageType",
    "DiagramView",
    "InventoryCheckItem",
    "VehicleBodyType",
    "VehicleInspection",
    "InspectionOrchestrator",
    "create_inspection_session",
]
