"""Vehicle diagram: active view, silhouette image, numbered pins and taps."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from ..geometry.hit_testing import (
    CanvasRect,
    TapEvent,
    event_client_point,
    map_event_to_percent,
    percent_to_pixels,
)
from ..models.inspection import VIEW_ORDER, DamageMarker, DiagramView, VehicleBodyType
from ..models.vocabulary import (
    damage_type_label,
    exhaustive,
    pluralize,
    severity_color,
    severity_label,
    view_label,
)

logger = logging.getLogger(__name__)

IMAGE_ROOT = "/images/inspection"

# Silhouette set used for each body type; suv and van reuse the sedan images
ASSET_BODY_TYPES = exhaustive(VehicleBodyType, {
    VehicleBodyType.SEDAN: VehicleBodyType.SEDAN,
    VehicleBodyType.PICKUP: VehicleBodyType.PICKUP,
    VehicleBodyType.SUV: VehicleBodyType.SEDAN,
    VehicleBodyType.VAN: VehicleBodyType.SEDAN,
})

# Half the side of a pin's square touch target (20px dot + 12px padding)
PIN_HIT_HALF_SIZE = 22.0

HINT_TEXT = "Toca para marcar un daño"


def resolve_body_type(body_type: VehicleBodyType) -> VehicleBodyType:
    """Body type whose silhouette images are shown for ``body_type``."""
    return ASSET_BODY_TYPES[VehicleBodyType(body_type)]


def image_path(body_type: VehicleBodyType, view: DiagramView) -> str:
    resolved = resolve_body_type(body_type)
    return f"{IMAGE_ROOT}/{resolved.value}-{DiagramView(view).value}.png"


@dataclass(frozen=True)
class MarkerPin:
    """A numbered pin drawn over the diagram at the marker's percentages."""
    number: int
    marker: DamageMarker
    color: str
    aria_label: str
    interactive: bool
    
    @property
    def left(self) -> float:
        return self.marker.x
    
    @property
    def top(self) -> float:
        return self.marker.y


@dataclass(frozen=True)
class AddRequested:
    """Empty canvas tapped: a pending position awaiting the marker editor."""
    view: DiagramView
    x: float
    y: float


@dataclass(frozen=True)
class MarkerSelected:
    """An existing pin tapped: the marker should be opened for editing."""
    marker: DamageMarker


DiagramAction = Union[AddRequested, MarkerSelected]


class VehicleDiagram:
    """
    One of four silhouette views with the markers placed on it.
    
    View selection is unrestricted. Taps are resolved at this boundary:
    pixel positions are converted to percentages for new markers, and pins
    are hit-tested in pixels. A tap on a pin never also counts as a canvas
    tap.
    """
    
    def __init__(
        self,
        body_type: VehicleBodyType,
        markers: Sequence[DamageMarker] = (),
        active_view: DiagramView = DiagramView.TOP,
        read_only: bool = False,
        on_view_change: Optional[Callable[[DiagramView], None]] = None
    ):
        self.body_type = VehicleBodyType(body_type)
        self.markers = list(markers)
        self.active_view = DiagramView(active_view)
        self.read_only = read_only
        self._on_view_change = on_view_change
    
    @property
    def views(self) -> List[DiagramView]:
        return list(VIEW_ORDER)
    
    def select_view(self, view: DiagramView) -> None:
        self.active_view = DiagramView(view)
        logger.debug(f"Diagram view changed to {self.active_view.value}")
        if self._on_view_change is not None:
            self._on_view_change(self.active_view)
    
    @property
    def resolved_body_type(self) -> VehicleBodyType:
        return resolve_body_type(self.body_type)
    
    @property
    def image_src(self) -> str:
        return image_path(self.body_type, self.active_view)
    
    @property
    def image_alt(self) -> str:
        return f"Diagrama {self.resolved_body_type.value} - vista {view_label(self.active_view)}"
    
    @property
    def view_markers(self) -> List[DamageMarker]:
        return [marker for marker in self.markers if marker.view == self.active_view]
    
    def pins(self) -> List[MarkerPin]:
        """Pins for the active view, numbered from 1 in insertion order."""
        return [
            MarkerPin(
                number=number,
                marker=marker,
                color=severity_color(marker.severity),
                aria_label=(
                    f"Daño {number}: {damage_type_label(marker.damage_type)}, "
                    f"{severity_label(marker.severity)}"
                ),
                interactive=not self.read_only,
            )
            for number, marker in enumerate(self.view_markers, start=1)
        ]
    
    @property
    def hint(self) -> Optional[str]:
        if self.read_only or self.view_markers:
            return None
        return HINT_TEXT
    
    @property
    def count_badge(self) -> Optional[str]:
        count = len(self.view_markers)
        if count == 0:
            return None
        return f"{pluralize(count, 'daño')} en esta vista"
    
    def pin_at(self, event: TapEvent, rect: CanvasRect) -> Optional[DamageMarker]:
        """Marker whose pin contains the tap, topmost (last drawn) first."""
        point = event_client_point(event)
        if point is None or rect.width <= 0 or rect.height <= 0:
            return None
        
        client_x, client_y = point
        for pin in reversed(self.pins()):
            pin_x, pin_y = percent_to_pixels(pin.left, pin.top, rect)
            if (abs(client_x - pin_x) <= PIN_HIT_HALF_SIZE
                    and abs(client_y - pin_y) <= PIN_HIT_HALF_SIZE):
                return pin.marker
        return None
    
    def handle_tap(self, event: TapEvent, rect: CanvasRect) -> Optional[DiagramAction]:
        """
        Resolve a tap on the diagram.
        
        Args:
            event: Pointer or touch event in viewport coordinates
            rect: On-screen rectangle of the canvas
            
        Returns:
            MarkerSelected for a pin tap, AddRequested for an empty-canvas
            tap, None in read-only mode or for a touch without points
        """
        if self.read_only:
            return None
        
        marker = self.pin_at(event, rect)
        if marker is not None:
            return MarkerSelected(marker=marker)
        
        position = map_event_to_percent(event, rect)
        if position is None:
            return None
        x, y = position
        return AddRequested(view=self.active_view, x=x, y=y)
    
    def select_pin(self, marker_id: str) -> Optional[MarkerSelected]:
        """Direct activation of a pin, e.g. from the keyboard."""
        if self.read_only:
            return None
        for marker in self.view_markers:
            if marker.id == marker_id:
                return MarkerSelected(marker=marker)
        return None
