"""Coercion of collaborator-supplied drawing elements into BuildingElement."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from pydantic import ValidationError

from scopeworks.errors import ElementConversionError
from scopeworks.ids import IdGenerator
from scopeworks.models.confidence import ConfidenceLevel, confidence_level
from scopeworks.models.element import BuildingElement, ElementDimensions, ElementType

logger = logging.getLogger(__name__)

# Labels used by drawing analysis -> element type.  Room names become
# "other" elements located in that room.
ELEMENT_TYPE_ALIASES: dict[str, ElementType] = {
    "walls": ElementType.WALL,
    "doors": ElementType.DOOR,
    "windows": ElementType.WINDOW,
    "stairs": ElementType.OTHER,
    "roof": ElementType.ROOF,
    "floor": ElementType.FLOOR,
    "ceiling": ElementType.CEILING,
    "kitchen": ElementType.OTHER,
    "bathroom": ElementType.OTHER,
    "bedroom": ElementType.OTHER,
    "living": ElementType.OTHER,
    "garage": ElementType.OTHER,
    "balcony": ElementType.OTHER,
    "structural": ElementType.BEAM,
}

# Confidence supplied without a score defaults to this.
DEFAULT_ELEMENT_CONFIDENCE = 60


def map_element_type(label: str) -> ElementType:
    key = label.strip().lower()
    if key in ELEMENT_TYPE_ALIASES:
        return ELEMENT_TYPE_ALIASES[key]
    try:
        return ElementType(key)
    except ValueError:
        return ElementType.OTHER


def _confidence(raw: Any) -> ConfidenceLevel:
    if raw is None:
        return confidence_level(DEFAULT_ELEMENT_CONFIDENCE, ["Detected from drawing"])
    if isinstance(raw, ConfidenceLevel):
        return raw
    if isinstance(raw, Mapping):
        return ConfidenceLevel.model_validate(raw)
    score = float(raw)
    # Fractions in [0, 1] come from analysers that report probabilities.
    if 0 <= score <= 1:
        score *= 100
    return confidence_level(score, ["Drawing analysis"])


def coerce_element(raw: Any, ids: IdGenerator) -> BuildingElement:
    """Convert *raw* into a :class:`BuildingElement`.

    Accepts an existing element or a mapping with ``type``, ``location``
    (or ``description``), ``dimensions``, ``quantity``, ``unit`` and
    ``confidence`` keys.

    Raises
    ------
    ElementConversionError
        If *raw* has an unsupported shape or invalid values.
    """
    if isinstance(raw, BuildingElement):
        return raw
    if not isinstance(raw, Mapping):
        raise ElementConversionError(f"Unsupported drawing element: {type(raw).__name__}")

    label = str(raw.get("type") or "other")
    try:
        dimensions = raw.get("dimensions") or {}
        return BuildingElement(
            id=str(raw.get("id") or ids.new_id("element")),
            type=map_element_type(label),
            location=str(raw.get("location") or raw.get("description") or label),
            dimensions=ElementDimensions.model_validate(dimensions),
            material=raw.get("material"),
            specifications=tuple(raw.get("specifications") or ()),
            quantity=float(raw.get("quantity", 1) or 1),
            unit=str(raw.get("unit") or "each"),
            confidence=_confidence(raw.get("confidence")),
        )
    except (ValidationError, TypeError, ValueError) as exc:
        raise ElementConversionError(f"Invalid drawing element {label!r}: {exc}") from exc


def coerce_elements(raw_elements: Iterable[Any], ids: IdGenerator) -> tuple[list[BuildingElement], list[str]]:
    """Coerce every element, skipping the ones that cannot be converted.

    Returns the converted elements and one message per skipped element.
    """
    elements: list[BuildingElement] = []
    skipped: list[str] = []
    for raw in raw_elements:
        try:
            elements.append(coerce_element(raw, ids))
        except ElementConversionError as exc:
            logger.warning("Skipping drawing element: %s", exc)
            skipped.append(f"Skipped drawing element - {exc}")
    return elements, skipped
