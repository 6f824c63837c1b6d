"""Per-item calculation outcome: a success or a failure, never an exception."""

from __future__ import annotations

import logging
from typing import Iterable, Union

from pydantic import BaseModel, ConfigDict

from scopeworks.measurement import MeasurementCalculator
from scopeworks.models.element import BuildingElement
from scopeworks.models.measurement import MeasurementOptions, MeasurementResult
from scopeworks.models.scope import ScopeItem

logger = logging.getLogger(__name__)


class CalculationSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: ScopeItem
    result: MeasurementResult
    element_count: int = 0


class CalculationFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: ScopeItem
    error: str


CalculationOutcome = Union[CalculationSuccess, CalculationFailure]


def calculate_item(
    calculator: MeasurementCalculator,
    item: ScopeItem,
    elements: Iterable[BuildingElement],
    options: MeasurementOptions | None = None,
) -> CalculationOutcome:
    """Run the calculator for one item and capture any failure as a value."""
    elements = list(elements)
    try:
        result = calculator.calculate(item, elements, options)
    except Exception as exc:
        logger.warning("Quantity calculation failed for item %s: %s", item.id, exc, exc_info=True)
        return CalculationFailure(item=item, error=f"{type(exc).__name__}: {exc}")
    return CalculationSuccess(item=item, result=result, element_count=len(elements))
