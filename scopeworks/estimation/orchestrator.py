"""EstimationOrchestrator — scope text in, quantified and audited estimate out.

Usage::

    from scopeworks.estimation import process_estimation_request

    result = process_estimation_request(
        "Supply and install 19mm F11 structural plywood to kitchen ceiling.",
        project_type="residential",
        location="Sydney NSW",
    )
    if result.should_proceed:
        send_to_pricing(result.generated_quote)
    else:
        ask_user(result.questions)

Nothing raised inside the pipeline reaches the caller.  A failing item
becomes a zero-confidence placeholder; any other failure becomes a
degraded :class:`EstimationResult` with ``error`` set.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Iterable

from scopeworks.compliance import resolve_jurisdiction
from scopeworks.config import EstimatorSettings
from scopeworks.estimation import audit, summary
from scopeworks.estimation.elements import coerce_elements
from scopeworks.estimation.outcome import CalculationFailure, CalculationOutcome, calculate_item
from scopeworks.estimation.quote import build_quote
from scopeworks.ids import IdGenerator, UuidGenerator
from scopeworks.measurement import MeasurementCalculator, is_relevant, relevant_elements
from scopeworks.models.confidence import confidence_level
from scopeworks.models.element import BuildingElement, DrawingAnalysis
from scopeworks.models.estimate import (
    AuditTrail,
    ConfidenceSummary,
    EstimationRequest,
    EstimationResult,
    QuoteItem,
)
from scopeworks.models.measurement import ConstructionMethod, MeasurementOptions, ProjectType
from scopeworks.models.questions import EstimatorQuestion, QuestionContext
from scopeworks.models.scope import ScopeAnalysis, ScopeItem
from scopeworks.parsing import ScopeParser
from scopeworks.questions import QuestionGenerator

logger = logging.getLogger(__name__)

FAILED_ITEM_REASON = "Calculation failed - requires manual review"
FAILED_ITEM_SOURCE = "Calculation error"

# Checked in order; the first material named in the description wins.
CONSTRUCTION_METHOD_KEYWORDS: tuple[tuple[tuple[str, ...], ConstructionMethod], ...] = (
    (("timber", "wood"), ConstructionMethod.TIMBER_FRAME),
    (("steel",), ConstructionMethod.STEEL_FRAME),
    (("concrete",), ConstructionMethod.CONCRETE),
    (("brick", "block"), ConstructionMethod.MASONRY),
)


def infer_construction_method(item: ScopeItem) -> ConstructionMethod:
    """Guess the construction method from the item description.

    Defaults to timber frame, the common residential case.
    """
    description = item.description.lower()
    for keywords, method in CONSTRUCTION_METHOD_KEYWORDS:
        if any(k in description for k in keywords):
            return method
    return ConstructionMethod.TIMBER_FRAME


def augment_scope(scope_text: str, drawing_context: str | None) -> str:
    """Prepend a ready-made drawing summary to the scope text."""
    if not drawing_context or not drawing_context.strip():
        return scope_text
    return f"{drawing_context.strip()}\n\n{scope_text}"


class EstimationOrchestrator:
    """Runs parser, calculator and question generator over one request.

    Every collaborator is injectable.  By default they share the
    orchestrator's id generator and settings, and the calculator also
    links timber, concrete and steel items to structural elements.
    """

    def __init__(
        self,
        parser: ScopeParser | None = None,
        calculator: MeasurementCalculator | None = None,
        question_generator: QuestionGenerator | None = None,
        id_generator: IdGenerator | None = None,
        settings: EstimatorSettings | None = None,
    ) -> None:
        self._ids = id_generator or UuidGenerator()
        self._settings = settings or EstimatorSettings()
        self._parser = parser or ScopeParser(id_generator=self._ids, settings=self._settings)
        self._calculator = calculator or MeasurementCalculator(
            jurisdiction=self._settings.jurisdiction,
            relevance=partial(is_relevant, link_structural=True),
        )
        self._questions = question_generator or QuestionGenerator(
            id_generator=self._ids, settings=self._settings,
        )

    # -- public API --------------------------------------------------------

    def process(self, request: EstimationRequest) -> EstimationResult:
        """Process one estimation request.  Never raises."""
        quote_id = request.session_id or self._ids.new_id("quote")
        trail = audit.new_audit_trail(self._ids, quote_id)
        logger.info("Estimation %s started (%d chars of scope)", quote_id, len(request.scope_text))

        try:
            result = self._run(request, trail)
        except Exception as exc:
            logger.exception("Estimation %s failed", quote_id)
            return self._degraded(request, trail, exc)

        logger.info(
            "Estimation %s finished: %d items, %d questions, proceed=%s",
            quote_id, len(result.quote_items), len(result.questions), result.should_proceed,
        )
        return result

    # -- pipeline ----------------------------------------------------------

    def _run(self, request: EstimationRequest, trail: AuditTrail) -> EstimationResult:
        settings = self._settings

        # 1-2. parse the (optionally augmented) scope
        analysis = self._parser.parse(augment_scope(request.scope_text, request.drawing_context))
        trail.record(audit.scope_analysis_decision(analysis, self._ids))

        # 3. drawing elements
        elements = self._collect_elements(request, trail)
        if request.drawing_analyses:
            trail.record(audit.drawing_analysis_decision(request.drawing_analyses, len(elements), self._ids))

        # 4. quantities
        scale = request.drawing_analyses[0].scale if request.drawing_analyses else None
        quote_items: list[QuoteItem] = []
        for item in analysis.items:
            outcome = self._calculate(item, elements, request, scale)
            quote_items.append(self._quote_item(outcome, trail))

        # 5. questions
        questions = self._generate_questions(analysis, elements, request)

        # 6-8. summary, decision, quote
        confidence = summary.confidence_summary(quote_items, settings)
        proceed = summary.should_proceed(quote_items, questions, settings)
        quote = build_quote(quote_items, confidence, request.scope_text, self._ids) if proceed else None

        # 9. audit
        trail.questions_asked = list(questions)
        trail.confidence_summary = confidence

        # 10. next steps
        jurisdiction = resolve_jurisdiction(request.location, settings.jurisdiction)
        return EstimationResult(
            scope_analysis=analysis,
            drawing_analyses=list(request.drawing_analyses),
            questions=questions,
            quote_items=quote_items,
            generated_quote=quote,
            should_proceed=proceed,
            confidence_summary=confidence,
            audit_trail=trail,
            next_steps=summary.next_steps(quote_items, questions, proceed, settings, jurisdiction),
            estimated_duration=summary.estimated_duration(len(quote_items), len(questions)),
        )

    def _collect_elements(self, request: EstimationRequest, trail: AuditTrail) -> list[BuildingElement]:
        elements: list[BuildingElement] = []
        for drawing in request.drawing_analyses:
            elements.extend(drawing.elements)
        coerced, skipped = coerce_elements(request.drawing_elements, self._ids)
        elements.extend(coerced)
        for message in skipped:
            trail.assume(message)
        return elements

    def _calculate(
        self,
        item: ScopeItem,
        elements: list[BuildingElement],
        request: EstimationRequest,
        scale: str | None,
    ) -> CalculationOutcome:
        relevant = relevant_elements(item, elements, link_structural=True)
        options = MeasurementOptions(
            scale=scale,
            location_context=request.location,
            building_type=request.project_type or ProjectType.RESIDENTIAL,
            construction_method=infer_construction_method(item),
        )
        return calculate_item(self._calculator, item, relevant, options)

    def _quote_item(self, outcome: CalculationOutcome, trail: AuditTrail) -> QuoteItem:
        item = outcome.item
        if isinstance(outcome, CalculationFailure):
            trail.assume(f"Failed to calculate quantity for {item.description} - using placeholder")
            return QuoteItem(
                id=self._ids.new_id("quote-item"),
                scope_item_id=item.id,
                description=item.description,
                quantity=1,
                unit="item",
                confidence=confidence_level(0, [FAILED_ITEM_REASON]),
                source_reference=FAILED_ITEM_SOURCE,
                requires_manual_review=True,
            )

        result = outcome.result
        trail.record(audit.quantity_decision(
            item, result, self._ids, self._settings.high_confidence_threshold,
        ))
        return QuoteItem(
            id=self._ids.new_id("quote-item"),
            scope_item_id=item.id,
            description=item.description,
            quantity=result.quantity,
            unit=result.unit,
            confidence=result.confidence,
            source_reference=f"{outcome.element_count} elements on drawings",
            requires_manual_review=result.confidence.score < self._settings.low_confidence_threshold,
        )

    def _generate_questions(
        self,
        analysis: ScopeAnalysis,
        elements: list[BuildingElement],
        request: EstimationRequest,
    ) -> list[EstimatorQuestion]:
        context = QuestionContext(
            drawing_refs=tuple(d.file_name for d in request.drawing_analyses if d.file_name),
            project_type=request.project_type,
            location=request.location,
        )
        questions: list[EstimatorQuestion] = []
        for item in analysis.items:
            if item.confidence.score >= self._settings.question_confidence_threshold:
                continue
            generated = self._questions.generate(item, elements, analysis.ambiguities_for(item.id), context)
            questions.extend(generated.questions)
        return questions

    def failure_result(self, request: EstimationRequest, exc: Exception) -> EstimationResult:
        """Degraded result for a request that could not be processed."""
        trail = audit.new_audit_trail(self._ids, request.session_id or self._ids.new_id("quote"))
        return self._degraded(request, trail, exc)

    def _degraded(self, request: EstimationRequest, trail: AuditTrail, exc: Exception) -> EstimationResult:
        analysis = ScopeAnalysis(
            id=self._ids.new_id("scope"),
            original_scope=request.scope_text,
            confidence=confidence_level(0, ["Processing error occurred"]),
        )
        return EstimationResult(
            scope_analysis=analysis,
            confidence_summary=ConfidenceSummary(overall_confidence=confidence_level(0, ["Processing error"])),
            audit_trail=trail,
            next_steps=["Fix processing error", "Retry with simpler scope input"],
            estimated_duration="0 minutes",
            error=f"{type(exc).__name__}: {exc}",
        )


def process_estimation_request(
    scope_text: str,
    drawing_elements: Iterable[Any] | None = None,
    project_type: ProjectType | str | None = None,
    location: str | None = None,
    *,
    drawing_context: str | None = None,
    drawing_analyses: Iterable[DrawingAnalysis] | None = None,
    session_id: str | None = None,
    orchestrator: EstimationOrchestrator | None = None,
) -> EstimationResult:
    """Module-level entry point wrapping :meth:`EstimationOrchestrator.process`.

    *drawing_elements* may hold :class:`BuildingElement` instances or plain
    dicts in the drawing-analysis shape.  Like ``process`` this never
    raises; an invalid request is reported as a degraded result.
    """
    orchestrator = orchestrator or EstimationOrchestrator()
    try:
        request = EstimationRequest(
            scope_text=scope_text,
            drawing_elements=list(drawing_elements or ()),
            drawing_analyses=list(drawing_analyses or ()),
            drawing_context=drawing_context,
            project_type=project_type,
            location=location,
            session_id=session_id,
        )
    except Exception as exc:
        logger.exception("Invalid estimation request")
        request = EstimationRequest(scope_text=str(scope_text or ""), session_id=session_id)
        return orchestrator.failure_result(request, exc)
    return orchestrator.process(request)
