"""Per-section classification: category, location, specifications, measurement.

Each function takes the raw section text and reads its keywords from the
tables in :mod:`scopeworks.parsing.patterns`.
"""

from __future__ import annotations

import logging
import math
import re

from scopeworks.models.scope import (
    DEFAULT_UNITS,
    MeasurementType,
    QuantityRequirement,
    WorkCategory,
)
from scopeworks.parsing import patterns as p

logger = logging.getLogger(__name__)


def pattern_scores(text: str, rules: tuple[p.KeywordRule, ...]) -> dict[str, float]:
    """Return each rule's share of the weighted keyword hits in *text*.

    Shares sum to 1.0 when anything matched and are all 0.0 otherwise.
    Rules sharing a name accumulate.  Scores are shares of all hits, not
    hits per word of text; ``DOMINANT_ACTION_SCORE`` and
    ``MEASUREMENT_SCORE_THRESHOLD`` are compared against these shares.
    """
    raw: dict[str, float] = {}
    for name, pattern, weight in rules:
        hits = sum(1 for _ in pattern.finditer(text))
        raw[name] = raw.get(name, 0.0) + hits * weight

    total = sum(raw.values())
    if total == 0:
        return {name: 0.0 for name in raw}
    return {name: value / total for name, value in raw.items()}


def has_action(text: str) -> bool:
    return any(pattern.search(text) for _, pattern, _ in p.ACTION_RULES)


def has_material(text: str) -> bool:
    return any(pattern.search(text) for _, pattern, _ in p.MATERIAL_RULES)


def has_quantity_indicator(text: str) -> bool:
    """True when any linear/area/volume/count/weight keyword is present."""
    if p.WEIGHT_PATTERN.search(text):
        return True
    return any(pattern.search(text) for _, pattern, _ in p.MEASUREMENT_RULES)


def is_unambiguous(text: str) -> bool:
    return p.AMBIGUOUS_WORDS_PATTERN.search(text) is None


def requires_location(text: str) -> bool:
    """True when the wording implies physical placement of something."""
    return p.PLACEMENT_PATTERN.search(text) is not None


def determine_category(text: str) -> WorkCategory:
    scores = pattern_scores(text, p.ACTION_RULES)
    supply = scores.get("supply", 0.0)
    install = scores.get("install", 0.0)

    if scores.get("demolish", 0.0) > p.DOMINANT_ACTION_SCORE:
        return WorkCategory.DEMOLITION
    if scores.get("prepare", 0.0) > p.DOMINANT_ACTION_SCORE:
        return WorkCategory.PREPARATION
    if supply > install * p.ACTION_DOMINANCE_RATIO:
        return WorkCategory.SUPPLY
    if install > supply * p.ACTION_DOMINANCE_RATIO:
        return WorkCategory.INSTALL
    return WorkCategory.SUPPLY_INSTALL


def determine_measurement_type(text: str) -> MeasurementType:
    scores = pattern_scores(text, p.MEASUREMENT_RULES)
    if scores:
        # max() keeps the first of equal scores, i.e. table order.
        best = max(scores, key=lambda name: scores[name])
        if scores[best] > p.MEASUREMENT_SCORE_THRESHOLD:
            return MeasurementType(best)

    for measurement_type, pattern in p.MEASUREMENT_FALLBACKS:
        if pattern.search(text):
            logger.debug("Measurement type for %r from fallback: %s", text, measurement_type.value)
            return measurement_type

    return MeasurementType.ASSEMBLY


def extract_location(text: str) -> str | None:
    """Join the first room, level and orientation keywords found, in that order."""
    parts: list[str] = []
    for _, pattern in p.LOCATION_RULES:
        match = pattern.search(text)
        if match:
            parts.append(match.group(0))
    return " ".join(parts) if parts else None


def extract_specifications(text: str) -> list[str]:
    """Dimensions, one entry per matching material family, then product codes."""
    specs = [m.group(0).strip() for m in p.DIMENSION_PATTERN.finditer(text)]

    for family, pattern, _ in p.MATERIAL_RULES:
        match = pattern.search(text)
        if match:
            specs.append(f"{family}: {match.group(0)}")

    specs.extend(f"Product: {code}" for code in p.PRODUCT_CODE_PATTERN.findall(text))
    return specs


def extract_base_quantity(text: str) -> float | None:
    """First explicit quantity in *text*, or ``None``.

    A figure too large to hold as a finite float counts as no quantity.
    """
    for pattern in p.QUANTITY_PATTERNS:
        match = pattern.search(text)
        if match:
            value = float(match.group(1))
            if not math.isfinite(value):
                logger.debug("Ignoring unreadable quantity %.20s...", match.group(1))
                return None
            return value
    return None


def default_waste_factor(text: str) -> float:
    lowered = text.lower()
    for keyword, factor in p.WASTE_KEYWORDS:
        if keyword in lowered:
            return factor
    return p.DEFAULT_WASTE_FACTOR


def quantity_notes(text: str) -> list[str]:
    return [note for pattern, note in p.QUANTITY_NOTE_RULES if pattern.search(text)]


def extract_quantity_requirement(
    text: str,
    measurement_type: MeasurementType | None = None,
) -> QuantityRequirement:
    """Build the quantity requirement for a section.

    The base quantity is the first explicit quantity phrasing found, or
    ``None`` when the text states none.
    """
    if measurement_type is None:
        measurement_type = determine_measurement_type(text)

    base_quantity = extract_base_quantity(text)
    notes = quantity_notes(text)
    if base_quantity is None and matches_any(text, p.QUANTITY_PATTERNS):
        notes.append(p.UNREADABLE_QUANTITY_NOTE)

    return QuantityRequirement(
        type=measurement_type,
        unit=DEFAULT_UNITS[measurement_type],
        base_quantity=base_quantity,
        waste_factor=default_waste_factor(text),
        access_factor=p.ACCESS_FACTOR if p.ACCESS_PATTERN.search(text) else 1.0,
        complexity_factor=p.COMPLEXITY_FACTOR if p.COMPLEXITY_PATTERN.search(text) else 1.0,
        notes=tuple(notes),
    )


def matches_any(text: str, candidates: tuple[re.Pattern[str], ...]) -> bool:
    return any(pattern.search(text) for pattern in candidates)
