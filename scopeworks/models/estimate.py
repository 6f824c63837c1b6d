"""Orchestrator deliverables: quote items, audit trail, generated quote, result."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from scopeworks.models.confidence import ConfidenceLevel, confidence_level
from scopeworks.models.element import DrawingAnalysis
from scopeworks.models.measurement import ProjectType
from scopeworks.models.questions import EstimatorQuestion
from scopeworks.models.scope import ScopeAnalysis


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuoteItem(BaseModel):
    """An unpriced line item ready for the pricing collaborator."""

    model_config = ConfigDict(frozen=True)

    id: str
    scope_item_id: str
    description: str
    quantity: float
    unit: str
    unit_price: float = 0.0
    total_price: float = 0.0
    confidence: ConfidenceLevel
    source_reference: str | None = None
    requires_manual_review: bool = False


class DecisionType(str, Enum):
    MATERIAL_SELECTION = "material_selection"
    QUANTITY_CALCULATION = "quantity_calculation"
    METHOD_CHOICE = "method_choice"
    ASSUMPTION_MADE = "assumption_made"


class EstimationDecision(BaseModel):
    """One audited decision made by the orchestrator."""

    model_config = ConfigDict(frozen=True)

    id: str
    scope_item_id: str
    """Originating scope item id, or a pipeline step name such as 'scope_analysis'."""

    decision_type: DecisionType
    reasoning: str
    alternatives_considered: tuple[str, ...] = ()
    confidence_factors: tuple[str, ...] = ()
    risk_assessment: str = ""
    standards_reference: str | None = None
    timestamp: datetime = Field(default_factory=_utcnow)


class ConfidenceSummary(BaseModel):
    """Bucket counts over the quote items of one run."""

    model_config = ConfigDict(frozen=True)

    overall_confidence: ConfidenceLevel = Field(default_factory=lambda: confidence_level(0))
    high_confidence_items: int = 0
    medium_confidence_items: int = 0
    low_confidence_items: int = 0
    items_requiring_review: int = 0

    @property
    def total_items(self) -> int:
        return (
            self.high_confidence_items
            + self.medium_confidence_items
            + self.low_confidence_items
            + self.items_requiring_review
        )


class AuditTrail(BaseModel):
    """Append-only log of the decisions made during one run."""

    id: str
    quote_id: str
    actions: list[EstimationDecision] = Field(default_factory=list)
    questions_asked: list[EstimatorQuestion] = Field(default_factory=list)
    assumptions_made: list[str] = Field(default_factory=list)
    confidence_summary: ConfidenceSummary = Field(default_factory=ConfidenceSummary)
    estimator_notes: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)

    def record(self, decision: EstimationDecision) -> None:
        self.actions.append(decision)

    def assume(self, assumption: str) -> None:
        self.assumptions_made.append(assumption)


class QuoteStatus(str, Enum):
    DRAFT = "draft"
    PRICED = "priced"
    COMPLETE = "complete"


class QuoteSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_items: int = 0
    high_confidence: int = 0
    medium_confidence: int = 0
    low_confidence: int = 0
    needs_review: int = 0
    ready_for_pricing: int = 0


class GeneratedQuote(BaseModel):
    """Unpriced draft quote handed to the pricing collaborator."""

    id: str
    project_name: str
    items: list[QuoteItem] = Field(default_factory=list)
    summary: QuoteSummary = Field(default_factory=QuoteSummary)
    confidence_summary: ConfidenceSummary = Field(default_factory=ConfidenceSummary)
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    status: QuoteStatus = QuoteStatus.DRAFT
    created_at: datetime = Field(default_factory=_utcnow)


class EstimationRequest(BaseModel):
    """Input to the orchestrator.

    ``drawing_elements`` may hold BuildingElement instances or plain dicts
    in the collaborator's shape; they are coerced before measurement.
    """

    scope_text: str
    drawing_elements: list[Any] = Field(default_factory=list)
    drawing_analyses: list[DrawingAnalysis] = Field(default_factory=list)
    drawing_context: str | None = None
    """Ready-made drawing summary to prepend to the scope text."""

    project_type: ProjectType | None = None
    location: str | None = None
    session_id: str | None = None


class EstimationResult(BaseModel):
    scope_analysis: ScopeAnalysis
    drawing_analyses: list[DrawingAnalysis] = Field(default_factory=list)
    questions: list[EstimatorQuestion] = Field(default_factory=list)
    quote_items: list[QuoteItem] = Field(default_factory=list)
    generated_quote: GeneratedQuote | None = None
    should_proceed: bool = False
    confidence_summary: ConfidenceSummary = Field(default_factory=ConfidenceSummary)
    audit_trail: AuditTrail
    next_steps: list[str] = Field(default_factory=list)
    estimated_duration: str = "0 minutes"
    error: str | None = None
    """Set only on the degraded result produced after a pipeline failure."""
