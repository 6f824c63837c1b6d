"""ScopeParser — turns free-text scope of work into structured scope items.

Usage::

    from scopeworks.parsing import ScopeParser

    parser = ScopeParser()
    analysis = parser.parse("Supply and install 19mm plywood to kitchen ceiling.")
"""

from __future__ import annotations

import logging

from scopeworks.compliance import SCOPE_RULES, compliance_notes
from scopeworks.config import EstimatorSettings
from scopeworks.ids import IdGenerator, UuidGenerator
from scopeworks.models.confidence import confidence_level
from scopeworks.models.scope import (
    DEFAULT_UNITS,
    Ambiguity,
    AmbiguityType,
    MeasurementType,
    Priority,
    QuantityRequirement,
    ScopeAnalysis,
    ScopeItem,
)
from scopeworks.parsing import classify
from scopeworks.parsing.patterns import QUANTITY_INTERPRETATIONS
from scopeworks.parsing.resolution import (
    ItemConfidenceWeights,
    compute_completeness,
    compute_item_confidence,
    confidence_factors,
    detect_ambiguities,
    overall_confidence,
)
from scopeworks.parsing.sections import normalize_text, split_sections

logger = logging.getLogger(__name__)

# Score given to the single item produced when parsing fails.
FALLBACK_ITEM_SCORE = 10


class ScopeParser:
    """Rule-based scope parser.

    Stateless apart from its injected collaborators; one instance can be
    shared across threads.

    Parameters
    ----------
    id_generator:
        Source of ids for analyses, items and ambiguities.  Defaults to
        :class:`UuidGenerator`.
    settings:
        Pipeline settings (section length, ambiguity penalty, jurisdiction).
    weights:
        Item confidence weights.
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        settings: EstimatorSettings | None = None,
        weights: ItemConfidenceWeights | None = None,
    ) -> None:
        self._ids = id_generator or UuidGenerator()
        self._settings = settings or EstimatorSettings()
        self._weights = weights or ItemConfidenceWeights()

    def parse(self, scope_text: str) -> ScopeAnalysis:
        """Parse *scope_text* into a :class:`ScopeAnalysis`.

        Never raises.  Empty text gives an analysis with no items; any
        internal failure gives a single low-confidence item covering the
        whole input.
        """
        text = normalize_text(scope_text or "")
        if not text:
            return ScopeAnalysis(
                id=self._ids.new_id("scope"),
                original_scope=scope_text or "",
                confidence=confidence_level(0, ["No items found"]),
            )

        try:
            return self._parse(scope_text, text)
        except Exception:
            logger.exception("Scope parsing failed, returning whole-text fallback item")
            return self._fallback(scope_text, text)

    def parse_section(self, section: str) -> ScopeItem:
        """Classify and score one section of scope text."""
        description = section.strip()
        measurement_type = classify.determine_measurement_type(section)
        location = classify.extract_location(section)
        specifications = classify.extract_specifications(section)

        factors = confidence_factors(section, location, specifications)
        return ScopeItem(
            id=self._ids.new_id("item"),
            description=description,
            category=classify.determine_category(section),
            location=location,
            specifications=tuple(specifications),
            quantity_requirements=classify.extract_quantity_requirement(section, measurement_type),
            measurement_type=measurement_type,
            confidence=compute_item_confidence(section, factors, self._weights),
        )

    def _parse(self, original: str, text: str) -> ScopeAnalysis:
        sections = split_sections(text, self._settings.min_section_length)
        logger.debug("Split scope into %d sections", len(sections))

        items: list[ScopeItem] = []
        ambiguities: list[Ambiguity] = []
        for section in sections:
            item = self.parse_section(section)
            items.append(item)
            ambiguities.extend(detect_ambiguities(item, section, self._ids))
            logger.debug(
                "Item %s: category=%s type=%s score=%.0f",
                item.id, item.category.value, item.measurement_type.value, item.confidence.score,
            )

        return ScopeAnalysis(
            id=self._ids.new_id("scope"),
            original_scope=original,
            items=items,
            ambiguities=ambiguities,
            completeness=compute_completeness(items),
            confidence=overall_confidence(items, ambiguities, self._settings.ambiguity_penalty),
            compliance_notes=compliance_notes(
                [i.description for i in items], SCOPE_RULES, self._settings.jurisdiction,
            ),
        )

    def _fallback(self, original: str, text: str) -> ScopeAnalysis:
        unit = DEFAULT_UNITS[MeasurementType.ASSEMBLY]
        item = ScopeItem(
            id=self._ids.new_id("item"),
            description=text,
            quantity_requirements=QuantityRequirement(type=MeasurementType.ASSEMBLY, unit=unit),
            measurement_type=MeasurementType.ASSEMBLY,
            confidence=confidence_level(
                FALLBACK_ITEM_SCORE,
                uncertainty_factors=["Scope text could not be parsed"],
            ),
        )
        ambiguity = Ambiguity(
            id=self._ids.new_id("amb"),
            item_id=item.id,
            type=AmbiguityType.QUANTITY_UNCLEAR,
            description="Quantity or measurement method unclear",
            possible_interpretations=QUANTITY_INTERPRETATIONS,
            suggested_question=f'How should I calculate the quantity for "{item.description}"?',
            confidence_impact=-25,
            priority=Priority.HIGH,
        )
        return ScopeAnalysis(
            id=self._ids.new_id("scope"),
            original_scope=original,
            items=[item],
            ambiguities=[ambiguity],
            completeness=compute_completeness([item]),
            confidence=overall_confidence([item], [ambiguity], self._settings.ambiguity_penalty),
        )
