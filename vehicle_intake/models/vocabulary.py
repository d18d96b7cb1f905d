"""Display labels and colours for the inspection vocabularies.

Each table must cover every member of its enum; an incomplete table fails at
import time so adding an enum member forces the tables to be updated.
"""

from enum import Enum
from typing import Dict, Mapping, Type, TypeVar

from .inspection import DamageSeverity, DamageType, DiagramView, VehicleBodyType

E = TypeVar("E", bound=Enum)
V = TypeVar("V")


def exhaustive(enum_cls: Type[E], table: Dict[E, V]) -> Mapping[E, V]:
    """Return ``table`` after checking it has an entry for every member of ``enum_cls``."""
    missing = [member.value for member in enum_cls if member not in table]
    if missing:
        raise TypeError(f"{enum_cls.__name__} table is missing entries for: {', '.join(missing)}")
    return dict(table)


DAMAGE_TYPE_LABELS = exhaustive(DamageType, {
    DamageType.SCRATCH: "Rayón",
    DamageType.DENT: "Abolladura",
    DamageType.PAINT: "Pintura dañada",
    DamageType.CRACK: "Grieta",
    DamageType.BROKEN: "Roto",
    DamageType.MISSING: "Faltante",
    DamageType.RUST: "Óxido",
    DamageType.OTHER: "Otro",
})

DAMAGE_TYPE_COLORS = exhaustive(DamageType, {
    DamageType.SCRATCH: "#F59E0B",
    DamageType.DENT: "#EF4444",
    DamageType.PAINT: "#8B5CF6",
    DamageType.CRACK: "#DC2626",
    DamageType.BROKEN: "#991B1B",
    DamageType.MISSING: "#6B7280",
    DamageType.RUST: "#B45309",
    DamageType.OTHER: "#3B82F6",
})

DAMAGE_SEVERITY_LABELS = exhaustive(DamageSeverity, {
    DamageSeverity.LIGHT: "Leve",
    DamageSeverity.MODERATE: "Moderado",
    DamageSeverity.SEVERE: "Severo",
})

DAMAGE_SEVERITY_COLORS = exhaustive(DamageSeverity, {
    DamageSeverity.LIGHT: "#FCD34D",
    DamageSeverity.MODERATE: "#F97316",
    DamageSeverity.SEVERE: "#EF4444",
})

VEHICLE_BODY_TYPE_LABELS = exhaustive(VehicleBodyType, {
    VehicleBodyType.SEDAN: "Sedán",
    VehicleBodyType.PICKUP: "Pickup",
    VehicleBodyType.SUV: "SUV",
    VehicleBodyType.VAN: "Van",
})

DIAGRAM_VIEW_LABELS = exhaustive(DiagramView, {
    DiagramView.TOP: "Superior",
    DiagramView.FRONT: "Frontal",
    DiagramView.LEFT: "Lateral Izq.",
    DiagramView.RIGHT: "Lateral Der.",
})


def damage_type_label(damage_type: DamageType) -> str:
    return DAMAGE_TYPE_LABELS[DamageType(damage_type)]


def damage_type_color(damage_type: DamageType) -> str:
    return DAMAGE_TYPE_COLORS[DamageType(damage_type)]


def severity_label(severity: DamageSeverity) -> str:
    return DAMAGE_SEVERITY_LABELS[DamageSeverity(severity)]


def severity_color(severity: DamageSeverity) -> str:
    return DAMAGE_SEVERITY_COLORS[DamageSeverity(severity)]


def view_label(view: DiagramView) -> str:
    return DIAGRAM_VIEW_LABELS[DiagramView(view)]


def body_type_label(body_type: VehicleBodyType) -> str:
    return VEHICLE_BODY_TYPE_LABELS[VehicleBodyType(body_type)]


def pluralize(count: int, singular: str, plural_suffix: str = "s") -> str:
    """Format ``count`` with a naive Spanish plural, e.g. ``2 daños``."""
    return f"{count} {singular}{'' if count == 1 else plural_suffix}"
