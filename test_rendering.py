"""Tests for SVG rendering of the gauge and diagram."""

import xml.etree.ElementTree as ET

from vehicle_intake.components.diagram_view import VehicleDiagram
from vehicle_intake.components.fuel_gauge import FuelGauge
from vehicle_intake.models.inspection import (
    DamageMarker,
    DamageSeverity,
    DiagramView,
    MarkerAttributes,
    VehicleBodyType,
)
from vehicle_intake.rendering import render_fuel_gauge, render_vehicle_diagram

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_fuel_gauge_svg_is_well_formed():
    svg = render_fuel_gauge(FuelGauge(50, on_change=lambda v: None))
    
    root = ET.fromstring(svg)
    assert root.tag == f"{SVG_NS}svg"
    assert root.get("viewBox") == "0 0 200 110"
    assert 'transform="rotate(-90 100 100)"' in svg
    assert svg.count('role="button"') == 8
    assert svg.count('data-index="') == 4
    assert 'aria-label="Nivel de combustible: 50%"' in svg


def test_read_only_fuel_gauge_has_no_hit_targets():
    svg = render_fuel_gauge(FuelGauge(100, on_change=lambda v: None, read_only=True))
    
    ET.fromstring(svg)
    assert 'role="button"' not in svg
    assert 'opacity="0.8"' in svg


def test_diagram_svg_places_pins_in_pixels():
    markers = [
        DamageMarker.create(DiagramView.FRONT, 25, 50, MarkerAttributes(severity=DamageSeverity.SEVERE), marker_id="m1"),
        DamageMarker.create(DiagramView.TOP, 10, 10, MarkerAttributes(), marker_id="m2"),
    ]
    diagram = VehicleDiagram(VehicleBodyType.PICKUP, markers, active_view=DiagramView.FRONT)
    
    svg = render_vehicle_diagram(diagram, width=400, height=200)
    
    root = ET.fromstring(svg)
    circles = root.findall(f".//{SVG_NS}circle")
    assert len(circles) == 1
    assert (circles[0].get("cx"), circles[0].get("cy")) == ("100.0", "100.0")
    assert circles[0].get("fill") == "#EF4444"
    assert 'href="/images/inspection/pickup-front.png"' in svg
    assert 'data-marker-id="m1"' in svg
    assert "Toca para marcar" not in svg


def test_empty_diagram_shows_hint():
    svg = render_vehicle_diagram(VehicleDiagram(VehicleBodyType.SEDAN))
    
    ET.fromstring(svg)
    assert "Toca para marcar un daño" in svg
