"""SVG rendering of the fuel gauge and vehicle diagram."""

from .svg import render_fuel_gauge, render_vehicle_diagram

__all__ = ['render_fuel_gauge', 'render_vehicle_diagram']
