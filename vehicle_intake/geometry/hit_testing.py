"""Pointer/touch to diagram-percentage conversion."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class CanvasRect:
    """On-screen bounding box of the diagram canvas, in device pixels."""
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PointerEvent:
    """A mouse or pen click at viewport coordinates."""
    client_x: float
    client_y: float


@dataclass(frozen=True)
class TouchPoint:
    client_x: float
    client_y: float


@dataclass(frozen=True)
class TouchEvent:
    """
    A touch end. ``touches`` is usually empty on touch end, so the first
    changed touch is used as a fallback.
    """
    touches: Sequence[TouchPoint] = field(default_factory=tuple)
    changed_touches: Sequence[TouchPoint] = field(default_factory=tuple)


TapEvent = Union[PointerEvent, TouchEvent]


def event_client_point(event: TapEvent) -> Optional[Tuple[float, float]]:
    """Viewport coordinates of an event, or None for a touch with no touch points."""
    if isinstance(event, TouchEvent):
        points = list(event.touches) or list(event.changed_touches)
        if not points:
            return None
        return points[0].client_x, points[0].client_y
    return event.client_x, event.client_y


def to_percent(client_x: float, client_y: float, rect: CanvasRect) -> Optional[Tuple[float, float]]:
    """
    Convert viewport coordinates into clamped canvas percentages.
    
    Returns None for a degenerate (zero-sized) rectangle.
    """
    if rect.width <= 0 or rect.height <= 0:
        return None
    raw_x = (client_x - rect.left) / rect.width * 100.0
    raw_y = (client_y - rect.top) / rect.height * 100.0
    return _clamp(raw_x), _clamp(raw_y)


def map_event_to_percent(event: TapEvent, rect: CanvasRect) -> Optional[Tuple[float, float]]:
    """
    Map a tap on the diagram canvas to ``(x, y)`` in [0, 100] x [0, 100].
    
    Events fired slightly outside the rectangle are clamped onto its edge.
    A touch event without touch points yields None (no marker is added).
    
    Args:
        event: Pointer or touch event
        rect: Bounding box of the canvas
        
    Returns:
        Percentage pair, or None when the event carries no position
    """
    point = event_client_point(event)
    if point is None:
        return None
    return to_percent(point[0], point[1], rect)


def percent_to_pixels(x: float, y: float, rect: CanvasRect) -> Tuple[float, float]:
    """Inverse of :func:`to_percent`, used to hit-test rendered pins."""
    return rect.left + x / 100.0 * rect.width, rect.top + y / 100.0 * rect.height


def _clamp(value: float) -> float:
    return min(100.0, max(0.0, value))
