"""Quantity takeoff for scope items from drawing-derived building elements."""

from scopeworks.measurement.engine import MeasurementCalculator
from scopeworks.measurement.relevance import is_relevant, relevant_elements
from scopeworks.measurement.tables import MeasurementTables

__all__ = [
    "MeasurementCalculator",
    "MeasurementTables",
    "is_relevant",
    "relevant_elements",
]
