"""Scopeworks — construction scope-of-work estimation core."""

__version__ = "1.0.0"

from scopeworks.config import EstimatorSettings, configure_logging, load_settings
from scopeworks.errors import (
    ElementConversionError,
    InvalidQuantityError,
    ScopeworksError,
    UnsupportedMeasurementTypeError,
)
from scopeworks.estimation import (
    CalculationFailure,
    CalculationSuccess,
    EstimationOrchestrator,
    process_estimation_request,
)
from scopeworks.ids import IdGenerator, SequentialIdGenerator, UuidGenerator
from scopeworks.measurement import MeasurementCalculator, MeasurementTables
from scopeworks.models import (
    BuildingElement,
    ConfidenceLevel,
    DrawingAnalysis,
    EstimationRequest,
    EstimationResult,
    ScopeAnalysis,
    ScopeItem,
    confidence_level,
)
from scopeworks.parsing import ItemConfidenceWeights, ScopeParser
from scopeworks.questions import QuestionGenerator

__all__ = [
    "__version__",
    # Pipeline
    "EstimationOrchestrator",
    "process_estimation_request",
    "CalculationFailure",
    "CalculationSuccess",
    # Components
    "ItemConfidenceWeights",
    "MeasurementCalculator",
    "MeasurementTables",
    "QuestionGenerator",
    "ScopeParser",
    # Models
    "BuildingElement",
    "ConfidenceLevel",
    "DrawingAnalysis",
    "EstimationRequest",
    "EstimationResult",
    "ScopeAnalysis",
    "ScopeItem",
    "confidence_level",
    # Configuration
    "EstimatorSettings",
    "configure_logging",
    "load_settings",
    "IdGenerator",
    "SequentialIdGenerator",
    "UuidGenerator",
    # Errors
    "ElementConversionError",
    "InvalidQuantityError",
    "ScopeworksError",
    "UnsupportedMeasurementTypeError",
]
