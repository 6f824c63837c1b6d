"""Pydantic models shared by the parser, calculator, question generator and orchestrator."""

from scopeworks.models.confidence import (
    ConfidenceIndicator,
    ConfidenceLevel,
    ConfidenceThreshold,
    confidence_level,
)
from scopeworks.models.element import (
    BuildingElement,
    DrawingAnalysis,
    ElementDimensions,
    ElementType,
)
from scopeworks.models.estimate import (
    AuditTrail,
    ConfidenceSummary,
    DecisionType,
    EstimationDecision,
    EstimationRequest,
    EstimationResult,
    GeneratedQuote,
    QuoteItem,
    QuoteStatus,
    QuoteSummary,
)
from scopeworks.models.measurement import (
    ConstructionMethod,
    MeasurementOptions,
    MeasurementResult,
    ProjectType,
)
from scopeworks.models.questions import (
    CostImpact,
    EstimatorQuestion,
    QuestionContext,
    QuestionGenerationResult,
    QuestionOption,
    QuestionType,
)
from scopeworks.models.scope import (
    DEFAULT_UNITS,
    Ambiguity,
    AmbiguityType,
    MeasurementType,
    Priority,
    QuantityRequirement,
    ScopeAnalysis,
    ScopeItem,
    WorkCategory,
)

__all__ = [
    "DEFAULT_UNITS",
    "Ambiguity",
    "AmbiguityType",
    "AuditTrail",
    "BuildingElement",
    "ConfidenceIndicator",
    "ConfidenceLevel",
    "ConfidenceSummary",
    "ConfidenceThreshold",
    "ConstructionMethod",
    "CostImpact",
    "DecisionType",
    "DrawingAnalysis",
    "ElementDimensions",
    "ElementType",
    "EstimationDecision",
    "EstimationRequest",
    "EstimationResult",
    "EstimatorQuestion",
    "GeneratedQuote",
    "MeasurementOptions",
    "MeasurementResult",
    "MeasurementType",
    "Priority",
    "ProjectType",
    "QuantityRequirement",
    "QuestionContext",
    "QuestionGenerationResult",
    "QuestionOption",
    "QuestionType",
    "QuoteItem",
    "QuoteStatus",
    "QuoteSummary",
    "ScopeAnalysis",
    "ScopeItem",
    "WorkCategory",
    "confidence_level",
]
