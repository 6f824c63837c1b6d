"""Per-element measures.  All lengths in metres, areas in m², volumes in m³."""

from __future__ import annotations

import re

from scopeworks.measurement.tables import MeasurementTables
from scopeworks.models.element import BuildingElement

_THICKNESS = re.compile(r"(\d+)\s*mm")


def wall_perimeter(element: BuildingElement) -> float:
    """``2 * (length + width)`` when both are known, else the length."""
    length = element.dimensions.length or 0.0
    width = element.dimensions.width or 0.0
    if length and width:
        return 2 * (length + width)
    return length


def wall_area(element: BuildingElement, tables: MeasurementTables) -> float:
    length = element.dimensions.length or 0.0
    height = element.dimensions.height or tables.standard_ceiling_height
    return length * height


def plan_area(element: BuildingElement) -> float:
    """Stated area, or length x width."""
    dims = element.dimensions
    if dims.area:
        return dims.area
    return (dims.length or 0.0) * (dims.width or 0.0)


def roof_area(element: BuildingElement, tables: MeasurementTables) -> float:
    return (element.dimensions.area or 0.0) * tables.roof_pitch_factor


def box_volume(element: BuildingElement) -> float:
    dims = element.dimensions
    return (dims.length or 0.0) * (dims.width or 0.0) * (dims.height or 0.0)


def extract_thickness(description: str) -> float | None:
    """First ``<n>mm`` in *description*, converted to metres."""
    match = _THICKNESS.search(description)
    if match:
        return int(match.group(1)) / 1000
    return None
