"""Audit trail entries recorded by the orchestrator, one per pipeline step."""

from __future__ import annotations

from typing import Sequence

from scopeworks.ids import IdGenerator
from scopeworks.models.element import DrawingAnalysis
from scopeworks.models.estimate import AuditTrail, DecisionType, EstimationDecision
from scopeworks.models.measurement import MeasurementResult
from scopeworks.models.scope import ScopeAnalysis, ScopeItem

SCOPE_ANALYSIS_STEP = "scope_analysis"
DRAWING_ANALYSIS_STEP = "drawing_analysis"


def new_audit_trail(ids: IdGenerator, quote_id: str) -> AuditTrail:
    return AuditTrail(id=ids.new_id("audit"), quote_id=quote_id)


def scope_analysis_decision(analysis: ScopeAnalysis, ids: IdGenerator) -> EstimationDecision:
    if analysis.ambiguities:
        risk = "Medium - requires clarification"
    else:
        risk = "Low - clear scope"
    return EstimationDecision(
        id=ids.new_id("decision"),
        scope_item_id=SCOPE_ANALYSIS_STEP,
        decision_type=DecisionType.METHOD_CHOICE,
        reasoning="Parsed scope into structured items using pattern recognition",
        alternatives_considered=("Manual parsing", "Simple text analysis"),
        confidence_factors=(
            f"{len(analysis.items)} items extracted",
            f"{len(analysis.ambiguities)} ambiguities found",
        ),
        risk_assessment=risk,
    )


def drawing_analysis_decision(
    analyses: Sequence[DrawingAnalysis],
    element_count: int,
    ids: IdGenerator,
) -> EstimationDecision:
    return EstimationDecision(
        id=ids.new_id("decision"),
        scope_item_id=DRAWING_ANALYSIS_STEP,
        decision_type=DecisionType.METHOD_CHOICE,
        reasoning="Analyzed architectural drawings for building elements and dimensions",
        alternatives_considered=("Skip drawing analysis", "Manual measurement"),
        confidence_factors=(
            f"{len(analyses)} drawings analyzed",
            f"{element_count} elements found",
        ),
        risk_assessment="Low - drawing data available",
    )


def quantity_decision(
    item: ScopeItem,
    result: MeasurementResult,
    ids: IdGenerator,
    review_threshold: float = 85,
) -> EstimationDecision:
    """Record how the quantity of *item* was worked out."""
    if result.confidence.score >= review_threshold:
        risk = "Low"
    else:
        risk = "Medium - requires review"
    return EstimationDecision(
        id=ids.new_id("decision"),
        scope_item_id=item.id,
        decision_type=DecisionType.QUANTITY_CALCULATION,
        reasoning=result.calculation_method,
        alternatives_considered=("Provisional allowance", "Manual calculation"),
        confidence_factors=result.assumptions,
        risk_assessment=risk,
        standards_reference="; ".join(result.compliance_notes) or None,
    )
