"""Render inspection components as standalone SVG documents."""

import logging
from typing import Any, Dict, List

from jinja2 import DictLoader, Environment, StrictUndefined

from ..components.diagram_view import VehicleDiagram
from ..components.fuel_gauge import FuelGauge
from ..geometry import fuel_gauge as geometry
from ..geometry.hit_testing import CanvasRect, percent_to_pixels
from ..models.vocabulary import view_label
from .templates import TEMPLATES

logger = logging.getLogger(__name__)

PIN_RADIUS = 10

_env = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=True,
    undefined=StrictUndefined,
)


def render_fuel_gauge(gauge: FuelGauge) -> str:
    """Render the gauge with its lit segments, hit targets and needle."""
    template = _env.get_template("fuel_gauge.svg")
    return template.render(
        gauge=gauge,
        segments=gauge.segments(),
        track_color=geometry.TRACK_COLOR,
        cx=geometry.format_number(geometry.CX),
        cy=geometry.format_number(geometry.CY),
        needle_tip=geometry.format_number(geometry.CX + geometry.R_OUTER - 8),
    )


def render_vehicle_diagram(diagram: VehicleDiagram, width: int = 600, height: int = 400) -> str:
    """
    Render the active view of the diagram at a fixed pixel size.
    
    Stored percentages are converted to pixels here; nothing rendered is
    written back into the markers.
    
    Args:
        diagram: Diagram to render
        width: Canvas width in pixels
        height: Canvas height in pixels
        
    Returns:
        SVG document as a string
    """
    rect = CanvasRect(left=0, top=0, width=width, height=height)
    pins: List[Dict[str, Any]] = []
    for pin in diagram.pins():
        cx, cy = percent_to_pixels(pin.left, pin.top, rect)
        pins.append({
            "marker": pin.marker,
            "number": pin.number,
            "color": pin.color,
            "aria_label": pin.aria_label,
            "cx": round(cx, 2),
            "cy": round(cy, 2),
        })
    
    template = _env.get_template("vehicle_diagram.svg")
    svg = template.render(
        diagram=diagram,
        pins=pins,
        pin_radius=PIN_RADIUS,
        width=width,
        height=height,
        view_label=view_label(diagram.active_view),
    )
    logger.debug(f"Rendered diagram view {diagram.active_view.value} with {len(pins)} pins")
    return svg
