"""Clarification questions raised against scope items."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from scopeworks.models.measurement import ProjectType
from scopeworks.models.scope import Priority


class QuestionType(str, Enum):
    CLARIFICATION = "clarification"
    SPECIFICATION = "specification"
    ASSUMPTION_VALIDATION = "assumption_validation"
    MISSING_INFORMATION = "missing_information"


class CostImpact(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    NEUTRAL = "neutral"


class QuestionOption(BaseModel):
    """One multiple-choice answer and what choosing it implies."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    implications: tuple[str, ...] = ()
    confidence_adjustment: float = 0.0
    cost_impact: CostImpact = CostImpact.NEUTRAL


class EstimatorQuestion(BaseModel):
    """A clarification request.

    ``scope_item_id`` joins the answer back to the item it was asked about.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: QuestionType
    scope_item_id: str
    question: str
    context: str = ""
    options: tuple[QuestionOption, ...] = ()
    priority: Priority = Priority.MEDIUM
    confidence_impact: float = 0.0
    drawing_reference: str | None = None
    visual_references: tuple[str, ...] = ()


class QuestionContext(BaseModel):
    """Project context passed to the question generator."""

    model_config = ConfigDict(frozen=True)

    drawing_refs: tuple[str, ...] = ()
    project_type: ProjectType | None = None
    location: str | None = None


class QuestionGenerationResult(BaseModel):
    questions: list[EstimatorQuestion] = Field(default_factory=list)
    should_proceed: bool = False
    confidence_threshold_met: bool = False
    blocking_issues: list[str] = Field(default_factory=list)
