"""Item confidence scoring, ambiguity detection and scope-level aggregates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from scopeworks.ids import IdGenerator
from scopeworks.models.confidence import ConfidenceLevel, confidence_level
from scopeworks.models.scope import (
    Ambiguity,
    AmbiguityType,
    Priority,
    ScopeItem,
    WorkCategory,
)
from scopeworks.parsing import classify
from scopeworks.parsing import patterns as p


class ItemConfidenceWeights(BaseModel):
    """Additive weights of the item confidence model.

    The score starts at ``base`` and each satisfied factor adds (or, for
    penalties, subtracts) its weight.  The result is clamped to [0, 100].
    """

    model_config = ConfigDict(frozen=True)

    base: float = 50
    action: float = 10
    material: float = 20
    location: float = 10
    specifications: float = 15
    quantity_indicator: float = 20
    unambiguous: float = 15
    explicit_quantity: float = 10
    dimensions: float = 5
    complexity_penalty: float = 20
    standard_item: float = 10
    clear_action: float = 5


class ConfidenceFactors(BaseModel):
    """The boolean evidence extracted from one section."""

    model_config = ConfigDict(frozen=True)

    has_action: bool = False
    has_material: bool = False
    has_location: bool = False
    has_specifications: bool = False
    has_quantity_indicator: bool = False
    is_unambiguous: bool = False


def confidence_factors(text: str, location: str | None, specifications: list[str]) -> ConfidenceFactors:
    return ConfidenceFactors(
        has_action=classify.has_action(text),
        has_material=classify.has_material(text),
        has_location=bool(location),
        has_specifications=bool(specifications),
        has_quantity_indicator=classify.has_quantity_indicator(text),
        is_unambiguous=classify.is_unambiguous(text),
    )


def compute_item_confidence(
    text: str,
    factors: ConfidenceFactors,
    weights: ItemConfidenceWeights | None = None,
) -> ConfidenceLevel:
    """Score a section with the additive model and attach reasons.

    Reasons and uncertainty factors are recorded so that later stages
    (question generation in particular) can react to what was missing.
    """
    w = weights or ItemConfidenceWeights()
    score = w.base

    if factors.has_action:
        score += w.action
    if factors.has_material:
        score += w.material
    if factors.has_location:
        score += w.location
    if factors.has_specifications:
        score += w.specifications
    if factors.has_quantity_indicator:
        score += w.quantity_indicator
    if factors.is_unambiguous:
        score += w.unambiguous

    if classify.matches_any(text, p.EXPLICIT_QUANTITY_PATTERNS):
        score += w.explicit_quantity
    if classify.matches_any(text, p.EXPLICIT_DIMENSION_PATTERNS):
        score += w.dimensions
    if p.COMPLEXITY_PENALTY_PATTERN.search(text):
        score -= w.complexity_penalty
    if p.STANDARD_ITEM_PATTERN.search(text):
        score += w.standard_item
    if p.CLEAR_ACTION_PATTERN.search(text):
        score += w.clear_action

    reasons: list[str] = []
    if factors.has_action and factors.has_material:
        reasons.append("Clear action and material specified")
    if factors.has_specifications:
        reasons.append("Detailed specifications provided")
    if factors.has_quantity_indicator:
        reasons.append("Quantity measurement method indicated")
    if factors.is_unambiguous:
        reasons.append("Unambiguous description")

    uncertainties: list[str] = []
    if not factors.has_action:
        uncertainties.append("Action not clearly specified")
    if not factors.has_material:
        uncertainties.append("Material type unclear")
    if not factors.has_location:
        uncertainties.append("Location not specified")
    if not factors.has_quantity_indicator:
        uncertainties.append("Quantity calculation method unclear")
    if p.MULTIPLE_OPTIONS_PATTERN.search(text):
        uncertainties.append("Multiple options presented")

    return confidence_level(score, reasons, uncertainties)


def suggest_materials(text: str) -> list[str]:
    suggestions: list[str] = []
    for pattern, options in p.MATERIAL_SUGGESTIONS:
        if pattern.search(text):
            suggestions.extend(options)
    return suggestions or list(p.DEFAULT_MATERIAL_SUGGESTIONS)


def detect_ambiguities(item: ScopeItem, text: str, ids: IdGenerator) -> list[Ambiguity]:
    """Return the ambiguities of one item, in a fixed order.

    Checks:
      - no material keyword          -> material_specification (high, -30)
      - no quantity indicator        -> quantity_unclear (high, -25)
      - placement without a location -> location_undefined (medium, -20)
    """
    found: list[Ambiguity] = []

    if not classify.has_material(text):
        found.append(Ambiguity(
            id=ids.new_id("amb"),
            item_id=item.id,
            type=AmbiguityType.MATERIAL_SPECIFICATION,
            description="Material specification unclear or missing",
            possible_interpretations=tuple(suggest_materials(text)),
            suggested_question=f'What specific material should be used for "{item.description}"?',
            confidence_impact=-30,
            priority=Priority.HIGH,
        ))

    if not classify.has_quantity_indicator(text):
        found.append(Ambiguity(
            id=ids.new_id("amb"),
            item_id=item.id,
            type=AmbiguityType.QUANTITY_UNCLEAR,
            description="Quantity or measurement method unclear",
            possible_interpretations=p.QUANTITY_INTERPRETATIONS,
            suggested_question=f'How should I calculate the quantity for "{item.description}"?',
            confidence_impact=-25,
            priority=Priority.HIGH,
        ))

    if not item.location and classify.requires_location(text):
        found.append(Ambiguity(
            id=ids.new_id("amb"),
            item_id=item.id,
            type=AmbiguityType.LOCATION_UNDEFINED,
            description="Location not specified",
            possible_interpretations=p.LOCATION_INTERPRETATIONS,
            suggested_question=f'Where specifically should "{item.description}" be installed?',
            confidence_impact=-20,
            priority=Priority.MEDIUM,
        ))

    return found


def item_completeness(item: ScopeItem) -> float:
    """0-100 structural completeness of one item."""
    score = 0.0
    if item.category is not WorkCategory.SUPPLY_INSTALL:
        score += 20
    if item.location:
        score += 20
    if item.specifications:
        score += 25
    if item.quantity_requirements is not None:
        score += 35
    return score


def compute_completeness(items: list[ScopeItem]) -> float:
    if not items:
        return 0.0
    return sum(item_completeness(i) for i in items) / len(items)


def overall_confidence(
    items: list[ScopeItem],
    ambiguities: list[Ambiguity],
    penalty: float = 5,
) -> ConfidenceLevel:
    """Mean item confidence less *penalty* points per ambiguity, floored at 0."""
    if not items:
        return confidence_level(0, ["No items found"])

    average = sum(i.confidence.score for i in items) / len(items)
    reasons = [
        f"Average item confidence: {average:.1f}%",
        f"{len(ambiguities)} ambiguities found",
        f"{len(items)} items extracted",
    ]
    return confidence_level(max(0.0, average - penalty * len(ambiguities)), reasons)
