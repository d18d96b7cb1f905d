"""Inspection record data models."""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class VehicleBodyType(str, Enum):
    SEDAN = "sedan"
    PICKUP = "pickup"
    SUV = "suv"
    VAN = "van"


class DamageType(str, Enum):
    SCRATCH = "scratch"
    DENT = "dent"
    PAINT = "paint"
    CRACK = "crack"
    BROKEN = "broken"
    MISSING = "missing"
    RUST = "rust"
    OTHER = "other"


class DamageSeverity(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    SEVERE = "severe"


class DiagramView(str, Enum):
    TOP = "top"
    FRONT = "front"
    LEFT = "left"
    RIGHT = "right"


# Fixed order used for view tabs and for read-only auto-selection
VIEW_ORDER: Tuple[DiagramView, ...] = (
    DiagramView.TOP,
    DiagramView.FRONT,
    DiagramView.LEFT,
    DiagramView.RIGHT,
)

DEFAULT_DAMAGE_TYPE = DamageType.SCRATCH
DEFAULT_SEVERITY = DamageSeverity.LIGHT


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return str(uuid.uuid4())


def clamp_percent(value: float) -> float:
    """Clamp a coordinate into the [0, 100] percentage range."""
    return min(100.0, max(0.0, float(value)))


@dataclass(frozen=True)
class MarkerAttributes:
    """
    Descriptive fields of a damage marker, as produced by the marker editor.
    
    Attributes:
        damage_type: Kind of damage observed
        severity: Severity level
        description: Optional free-text notes
        photo_urls: Public URLs of up to three evidence photos
    """
    damage_type: DamageType = DEFAULT_DAMAGE_TYPE
    severity: DamageSeverity = DEFAULT_SEVERITY
    description: str = ""
    photo_urls: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DamageMarker:
    """
    A single recorded damage annotation at a coordinate within one view.
    
    Identity (``id``, ``view``, ``x``, ``y``) is fixed at creation. Edits
    produce a new instance through :meth:`with_attributes`, which only touches
    the descriptive fields.
    
    Attributes:
        id: Opaque unique identifier
        view: Diagram view the marker was placed on
        x: Horizontal position, percentage of canvas width (0-100)
        y: Vertical position, percentage of canvas height (0-100)
        damage_type: Kind of damage observed
        severity: Severity level
        description: Optional free-text notes
        photo_urls: Public URLs of up to three evidence photos
    """
    id: str
    view: DiagramView
    x: float
    y: float
    damage_type: DamageType = DEFAULT_DAMAGE_TYPE
    severity: DamageSeverity = DEFAULT_SEVERITY
    description: str = ""
    photo_urls: Tuple[str, ...] = ()
    
    @classmethod
    def create(
        cls,
        view: DiagramView,
        x: float,
        y: float,
        attributes: MarkerAttributes,
        marker_id: Optional[str] = None
    ) -> "DamageMarker":
        """Create a marker with clamped coordinates and a fresh id."""
        return cls(
            id=marker_id or new_id(),
            view=DiagramView(view),
            x=clamp_percent(x),
            y=clamp_percent(y),
            damage_type=attributes.damage_type,
            severity=attributes.severity,
            description=attributes.description,
            photo_urls=tuple(attributes.photo_urls),
        )
    
    @property
    def attributes(self) -> MarkerAttributes:
        return MarkerAttributes(
            damage_type=self.damage_type,
            severity=self.severity,
            description=self.description,
            photo_urls=self.photo_urls,
        )
    
    def with_attributes(self, attributes: MarkerAttributes) -> "DamageMarker":
        """Return a copy with the descriptive fields replaced."""
        return replace(
            self,
            damage_type=attributes.damage_type,
            severity=attributes.severity,
            description=attributes.description,
            photo_urls=tuple(attributes.photo_urls),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "view": self.view.value,
            "x": self.x,
            "y": self.y,
            "damage_type": self.damage_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "photo_urls": list(self.photo_urls),
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DamageMarker":
        return cls(
            id=str(data["id"]),
            view=DiagramView(data["view"]),
            x=clamp_percent(data["x"]),
            y=clamp_percent(data["y"]),
            damage_type=DamageType(data.get("damage_type", DEFAULT_DAMAGE_TYPE.value)),
            severity=DamageSeverity(data.get("severity", DEFAULT_SEVERITY.value)),
            description=data.get("description") or "",
            photo_urls=tuple(data.get("photo_urls") or ()),
        )


@dataclass(frozen=True)
class InventoryCheckItem:
    """
    One entry of the inventory presence checklist.
    
    Attributes:
        id: Opaque unique identifier
        label: Fixed display text
        checked: Whether the item is present in the vehicle
        notes: Optional observation, only kept while checked
    """
    id: str
    label: str
    checked: bool = False
    notes: str = ""
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "checked": self.checked,
            "notes": self.notes,
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryCheckItem":
        return cls(
            id=str(data["id"]),
            label=str(data["label"]),
            checked=bool(data.get("checked", False)),
            notes=data.get("notes") or "",
        )


@dataclass(frozen=True)
class VehicleInspection:
    """
    The complete inspection record emitted to the parent form.
    
    Attributes:
        vehicle_type: Selected body type
        markers: Damage markers in insertion order
        checklist: Inventory checklist items in template order
    """
    vehicle_type: VehicleBodyType
    markers: Tuple[DamageMarker, ...] = field(default_factory=tuple)
    checklist: Tuple[InventoryCheckItem, ...] = field(default_factory=tuple)
    
    def with_changes(
        self,
        vehicle_type: Optional[VehicleBodyType] = None,
        markers: Optional[Sequence[DamageMarker]] = None,
        checklist: Optional[Sequence[InventoryCheckItem]] = None
    ) -> "VehicleInspection":
        """Return a complete copy with the given parts replaced."""
        return VehicleInspection(
            vehicle_type=VehicleBodyType(vehicle_type) if vehicle_type else self.vehicle_type,
            markers=tuple(markers) if markers is not None else self.markers,
            checklist=tuple(checklist) if checklist is not None else self.checklist,
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "vehicle_type": self.vehicle_type.value,
            "markers": [marker.to_dict() for marker in self.markers],
            "checklist": [item.to_dict() for item in self.checklist],
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VehicleInspection":
        return cls(
            vehicle_type=VehicleBodyType(data["vehicle_type"]),
            markers=tuple(DamageMarker.from_dict(m) for m in data.get("markers") or []),
            checklist=tuple(InventoryCheckItem.from_dict(i) for i in data.get("checklist") or []),
        )


def build_default_checklist(labels: Sequence[str]) -> List[InventoryCheckItem]:
    """
    Instantiate a fresh checklist from template labels, one new id per item.
    
    Args:
        labels: Template labels in display order
        
    Returns:
        List of unchecked InventoryCheckItem objects
    """
    return [InventoryCheckItem(id=new_id(), label=label) for label in labels]


def blank_inspection(
    body_type: VehicleBodyType,
    checklist_labels: Sequence[str]
) -> VehicleInspection:
    """Build an inspection with no markers and a freshly instantiated checklist."""
    return VehicleInspection(
        vehicle_type=VehicleBodyType(body_type),
        markers=(),
        checklist=tuple(build_default_checklist(checklist_labels)),
    )
