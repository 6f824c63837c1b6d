"""QuestionGenerator — clarification questions for one scope item.

Usage::

    from scopeworks.questions import QuestionGenerator

    generator = QuestionGenerator()
    result = generator.generate(item, elements, analysis.ambiguities_for(item.id))
"""

from __future__ import annotations

import logging
from typing import Iterable

from scopeworks.compliance import resolve_jurisdiction
from scopeworks.compliance.standards import codes_for
from scopeworks.config import EstimatorSettings
from scopeworks.ids import IdGenerator, UuidGenerator
from scopeworks.models.element import BuildingElement
from scopeworks.models.questions import (
    EstimatorQuestion,
    QuestionContext,
    QuestionGenerationResult,
    QuestionOption,
    QuestionType,
)
from scopeworks.models.scope import PRIORITY_ORDER, Ambiguity, Priority, ScopeItem, WorkCategory
from scopeworks.questions import options as opt
from scopeworks.questions.standards import is_quantity_unusual

logger = logging.getLogger(__name__)

# Uncertainty factors recorded by the parser that trigger follow-up questions.
MATERIAL_UNCLEAR = "Material type unclear"
QUANTITY_METHOD_UNCLEAR = "Quantity calculation method unclear"
LOCATION_MISSING = "Location not specified"


class QuestionGenerator:
    """Builds prioritised clarification questions for a scope item.

    Every question carries the originating ``scope_item_id``.

    Parameters
    ----------
    id_generator:
        Source of question ids.  Defaults to :class:`UuidGenerator`.
    settings:
        Supplies the confidence threshold and the default jurisdiction.
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        settings: EstimatorSettings | None = None,
    ) -> None:
        self._ids = id_generator or UuidGenerator()
        self._settings = settings or EstimatorSettings()

    def generate(
        self,
        item: ScopeItem,
        elements: Iterable[BuildingElement] = (),
        ambiguities: Iterable[Ambiguity] = (),
        context: QuestionContext | None = None,
    ) -> QuestionGenerationResult:
        """Generate questions for *item*, sorted high -> medium -> low.

        ``should_proceed`` is true only when no high-priority ambiguity is
        open and the item meets the confidence threshold.
        """
        context = context or QuestionContext()
        elements = list(elements)
        threshold_met = item.confidence.score >= self._settings.question_confidence_threshold

        questions: list[EstimatorQuestion] = []
        blocking: list[str] = []

        for ambiguity in ambiguities:
            questions.append(self._from_ambiguity(ambiguity, elements, context))
            if ambiguity.priority is Priority.HIGH:
                blocking.append(ambiguity.description)

        if not threshold_met:
            questions.extend(self._uncertainty_questions(item, elements, context))

        if not item.specifications:
            questions.append(self._material_question(item, elements, context))
        if item.category in (WorkCategory.INSTALL, WorkCategory.SUPPLY_INSTALL):
            questions.append(self._installation_question(item, elements, context))

        validation = self._quantity_validation_question(item, elements, context)
        if validation is not None:
            questions.append(validation)

        questions.extend(self._compliance_questions(item, elements, context))

        questions.sort(key=lambda q: PRIORITY_ORDER[q.priority])
        logger.debug("Item %s: %d questions, %d blocking", item.id, len(questions), len(blocking))

        return QuestionGenerationResult(
            questions=questions,
            should_proceed=not blocking and threshold_met,
            confidence_threshold_met=threshold_met,
            blocking_issues=blocking,
        )

    # -- helpers -----------------------------------------------------------

    def _codes(self, context: QuestionContext) -> dict[str, str]:
        return codes_for(self._jurisdiction(context))

    def _jurisdiction(self, context: QuestionContext) -> str:
        return resolve_jurisdiction(context.location, self._settings.jurisdiction)

    @staticmethod
    def _drawing_references(elements: list[BuildingElement], context: QuestionContext) -> tuple[str, ...]:
        refs = list(context.drawing_refs)
        types = list(dict.fromkeys(e.type.value for e in elements))
        if types:
            refs.append(f"Elements found: {', '.join(types)}")
        return tuple(refs)

    def _question(
        self,
        item: ScopeItem,
        question_type: QuestionType,
        question: str,
        context_text: str,
        options: tuple[QuestionOption, ...],
        priority: Priority,
        impact: float,
        visual_references: tuple[str, ...],
    ) -> EstimatorQuestion:
        return EstimatorQuestion(
            id=self._ids.new_id("q"),
            type=question_type,
            scope_item_id=item.id,
            question=question,
            context=context_text,
            options=options,
            priority=priority,
            confidence_impact=impact,
            visual_references=visual_references,
        )

    # -- question families -------------------------------------------------

    def _from_ambiguity(
        self,
        ambiguity: Ambiguity,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> EstimatorQuestion:
        text = ambiguity.description
        if elements:
            text += f" Found {len(elements)} relevant elements on drawings."
        if context.project_type:
            text += f" Project type: {context.project_type.value}."

        visual = list(context.drawing_refs)
        if elements:
            visual.append(f"{len(elements)} building elements found on drawings")

        return EstimatorQuestion(
            id=self._ids.new_id("q"),
            type=QuestionType.CLARIFICATION,
            scope_item_id=ambiguity.item_id,
            question=ambiguity.suggested_question,
            context=text,
            options=opt.interpretation_options(ambiguity.possible_interpretations),
            priority=ambiguity.priority,
            confidence_impact=ambiguity.confidence_impact,
            drawing_reference=context.drawing_refs[0] if context.drawing_refs else None,
            visual_references=tuple(visual),
        )

    def _uncertainty_questions(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> list[EstimatorQuestion]:
        questions: list[EstimatorQuestion] = []
        for factor in item.confidence.uncertainty_factors:
            if MATERIAL_UNCLEAR in factor:
                questions.append(self._material_question(item, elements, context))
            if QUANTITY_METHOD_UNCLEAR in factor:
                questions.append(self._quantity_method_question(item, elements, context))
            if LOCATION_MISSING in factor:
                questions.append(self._location_question(item, elements, context))
        return questions

    def _material_question(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> EstimatorQuestion:
        family, options = opt.material_options(item.description.lower(), self._codes(context))

        text = f'Material specification required for "{item.description}".'
        if context.project_type:
            text += f" Project type: {context.project_type.value}."
        if context.location:
            text += f" Location: {context.location} ({self._jurisdiction(context)} compliance applies)."

        return self._question(
            item,
            QuestionType.SPECIFICATION,
            f'What specific {family} material should be used for "{item.description}"?',
            text,
            options,
            Priority.HIGH,
            30,
            self._drawing_references(elements, context),
        )

    def _quantity_method_question(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> EstimatorQuestion:
        return self._question(
            item,
            QuestionType.CLARIFICATION,
            f'How should I calculate the quantity for "{item.description}"?',
            f"Item requires {item.measurement_type.value} measurement. "
            f"{len(elements)} relevant elements found on drawings.",
            opt.quantity_method_options(bool(elements), bool(item.base_quantity)),
            Priority.HIGH,
            25,
            self._drawing_references(elements, context),
        )

    def _location_question(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> EstimatorQuestion:
        locations = list(dict.fromkeys(e.location for e in elements if e.location))
        return self._question(
            item,
            QuestionType.CLARIFICATION,
            f'Where specifically should "{item.description}" be installed?',
            f"{len(elements)} building elements found. Location affects quantity calculation.",
            opt.location_options(locations),
            Priority.MEDIUM,
            20,
            self._drawing_references(elements, context),
        )

    def _installation_question(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> EstimatorQuestion:
        text = "Installation method affects material requirements and cost."
        if elements:
            text += f" {len(elements)} building elements found on drawings."
        return self._question(
            item,
            QuestionType.SPECIFICATION,
            f'What installation method should be used for "{item.description}"?',
            text,
            opt.installation_method_options(item.description.lower()),
            Priority.MEDIUM,
            15,
            self._drawing_references(elements, context),
        )

    def _quantity_validation_question(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> EstimatorQuestion | None:
        requirement = item.quantity_requirements
        if requirement is None or not requirement.base_quantity:
            return None
        quantity, unit = requirement.base_quantity, requirement.unit
        if not is_quantity_unusual(quantity, unit, item.description):
            return None

        return self._question(
            item,
            QuestionType.ASSUMPTION_VALIDATION,
            f'The quantity {quantity:g} {unit} seems unusual for "{item.description}". Please confirm:',
            "Quantity validation required for accurate estimation.",
            opt.quantity_validation_options(quantity, unit),
            Priority.HIGH,
            20,
            self._drawing_references(elements, context),
        )

    def _compliance_questions(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        context: QuestionContext,
    ) -> list[EstimatorQuestion]:
        description = item.description.lower()
        codes = self._codes(context)
        questions: list[EstimatorQuestion] = []

        if "structural" in description or "load bearing" in description:
            questions.append(self._question(
                item,
                QuestionType.SPECIFICATION,
                f'What structural compliance is required for "{item.description}"?',
                f"Structural items require compliance with {codes['timber_framing']} or {codes['steel_structures']}.",
                opt.structural_compliance_options(codes),
                Priority.HIGH,
                25,
                self._drawing_references(elements, context),
            ))

        if "fire" in description or "rating" in description:
            questions.append(self._question(
                item,
                QuestionType.SPECIFICATION,
                f'What fire rating is required for "{item.description}"?',
                "Fire-rated construction requires certified materials and methods.",
                opt.fire_compliance_options(codes),
                Priority.HIGH,
                20,
                self._drawing_references(elements, context),
            ))

        return questions
