"""Estimation pipeline: parse, measure, question, summarise and audit one request."""

from scopeworks.estimation.elements import coerce_element, coerce_elements
from scopeworks.estimation.orchestrator import (
    EstimationOrchestrator,
    infer_construction_method,
    process_estimation_request,
)
from scopeworks.estimation.outcome import (
    CalculationFailure,
    CalculationOutcome,
    CalculationSuccess,
    calculate_item,
)

__all__ = [
    "CalculationFailure",
    "CalculationOutcome",
    "CalculationSuccess",
    "EstimationOrchestrator",
    "calculate_item",
    "coerce_element",
    "coerce_elements",
    "infer_construction_method",
    "process_estimation_request",
]
