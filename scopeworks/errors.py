"""Exceptions raised inside the estimation core.

None of these escape :func:`scopeworks.estimation.process_estimation_request`;
they are caught at the item or pipeline boundary and turned into
well-formed, low-confidence output.
"""

from __future__ import annotations


class ScopeworksError(Exception):
    """Base class for all scopeworks errors."""


class UnsupportedMeasurementTypeError(ScopeworksError):
    """Raised when a scope item carries a measurement type with no calculator."""

    def __init__(self, measurement_type: object) -> None:
        super().__init__(f"Unsupported measurement type: {measurement_type!r}")
        self.measurement_type = measurement_type


class ElementConversionError(ScopeworksError):
    """Raised when a drawing element cannot be coerced to a BuildingElement."""


class InvalidQuantityError(ScopeworksError):
    """Raised when a takeoff produces a quantity that is not a finite number."""

    def __init__(self, item_id: str, quantity: float) -> None:
        super().__init__(f"Quantity for item {item_id} is not finite: {quantity!r}")
        self.item_id = item_id
        self.quantity = quantity
