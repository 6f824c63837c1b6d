"""Tests for the estimation orchestrator and its summary, audit and quote helpers."""

from __future__ import annotations

import pytest

from scopeworks.config import EstimatorSettings
from scopeworks.errors import ElementConversionError
from scopeworks.estimation import (
    CalculationFailure,
    CalculationSuccess,
    EstimationOrchestrator,
    calculate_item,
    coerce_element,
    coerce_elements,
    infer_construction_method,
    process_estimation_request,
)
from scopeworks.estimation import summary
from scopeworks.estimation.quote import extract_project_name
from scopeworks.ids import SequentialIdGenerator
from scopeworks.measurement import MeasurementCalculator
from scopeworks.models.confidence import confidence_level
from scopeworks.models.element import BuildingElement, DrawingAnalysis, ElementType
from scopeworks.models.estimate import DecisionType, EstimationRequest, QuoteItem
from scopeworks.models.measurement import ConstructionMethod
from scopeworks.models.questions import EstimatorQuestion, QuestionType
from scopeworks.models.scope import MeasurementType, Priority, QuantityRequirement, ScopeItem

SCENARIO_A = "Supply and install 19mm F11 structural plywood to kitchen ceiling. Area approximately 25 sqm."

MULTI_ITEM_SCOPE = """Bathroom renovation:
- Strip out existing tiles and fixtures
- Supply and install waterproofing membrane to shower 6 sqm
- Supply and lay 300x300 floor tiles 8 sqm
- Install new vanity and toilet
- Paint ceiling"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class ExplodingCalculator(MeasurementCalculator):
    def calculate(self, item, elements=(), options=None):
        raise RuntimeError("calculator exploded")


class BrokenParser:
    def parse(self, scope_text):
        raise ValueError("parser exploded")


def _orchestrator(**kwargs):
    return EstimationOrchestrator(id_generator=SequentialIdGenerator(), **kwargs)


def _quote_item(score, n=0):
    return QuoteItem(
        id=f"qi-{n}",
        scope_item_id=f"item-{n}",
        description="x",
        quantity=1,
        unit="item",
        confidence=confidence_level(score),
    )


def _question(priority, n=0):
    return EstimatorQuestion(
        id=f"q-{n}",
        type=QuestionType.CLARIFICATION,
        scope_item_id="item-0",
        question="?",
        priority=priority,
    )


# ---------------------------------------------------------------------------
# End-to-end pipeline
# ---------------------------------------------------------------------------

class TestPipeline:
    def test_scenario_a_end_to_end(self):
        result = _orchestrator().process(EstimationRequest(scope_text=SCENARIO_A))
        assert result.error is None
        assert len(result.quote_items) == 1
        quote_item = result.quote_items[0]
        assert quote_item.unit == "m²"
        assert quote_item.quantity == pytest.approx(27.5)
        assert quote_item.scope_item_id == result.scope_analysis.items[0].id
        assert result.questions == []
        assert result.should_proceed
        assert result.generated_quote is not None
        assert result.generated_quote.summary.ready_for_pricing == 1
        assert "Apply labor rates for AU-NSW construction" in result.next_steps

    def test_overflowing_stated_quantity_is_not_priced(self):
        text = "Supply " + "9" * 400 + " m2 floor tiles to kitchen"
        result = _orchestrator().process(EstimationRequest(scope_text=text))
        assert result.error is None
        assert [q.quantity for q in result.quote_items] == [0]
        assert result.scope_analysis.items[0].base_quantity is None
        assert not result.should_proceed
        assert result.generated_quote is None
        assert result.quote_items[0].model_dump(mode="json")["quantity"] == 0

    def test_empty_scope_never_proceeds(self):
        result = _orchestrator().process(EstimationRequest(scope_text=""))
        assert result.quote_items == []
        assert not result.should_proceed
        assert result.generated_quote is None
        assert result.confidence_summary.overall_confidence.reasons == ("No items to analyze",)

    def test_one_quote_item_per_scope_item(self):
        result = _orchestrator().process(EstimationRequest(scope_text=MULTI_ITEM_SCOPE))
        assert len(result.quote_items) == len(result.scope_analysis.items) == 5
        assert [q.scope_item_id for q in result.quote_items] == [i.id for i in result.scope_analysis.items]

    def test_bucket_counts_sum_to_items(self):
        result = _orchestrator().process(EstimationRequest(scope_text=MULTI_ITEM_SCOPE))
        assert result.confidence_summary.total_items == len(result.quote_items)
        assert result.audit_trail.confidence_summary == result.confidence_summary

    def test_questions_only_for_low_confidence_items(self):
        result = _orchestrator().process(EstimationRequest(scope_text=MULTI_ITEM_SCOPE))
        low = {i.id for i in result.scope_analysis.items if i.confidence.score < 85}
        assert result.questions
        assert {q.scope_item_id for q in result.questions} <= low
        assert result.audit_trail.questions_asked == result.questions

    def test_too_many_high_priority_questions_block(self):
        lenient = EstimatorSettings(max_high_priority_questions=0, min_average_confidence=0, max_review_fraction=1)
        result = _orchestrator(settings=lenient).process(EstimationRequest(scope_text=MULTI_ITEM_SCOPE))
        assert any(q.priority is Priority.HIGH for q in result.questions)
        assert not result.should_proceed
        assert result.generated_quote is None

    def test_failing_calculator_keeps_batch(self):
        orchestrator = _orchestrator(calculator=ExplodingCalculator())
        result = orchestrator.process(EstimationRequest(scope_text=MULTI_ITEM_SCOPE))
        assert result.error is None
        assert len(result.quote_items) == len(result.scope_analysis.items)
        for quote_item in result.quote_items:
            assert quote_item.quantity == 1
            assert quote_item.unit == "item"
            assert quote_item.confidence.score == 0
            assert quote_item.requires_manual_review
            assert quote_item.source_reference == "Calculation error"
        assert not result.should_proceed
        assert any(a.startswith("Failed to calculate quantity for") for a in result.audit_trail.assumptions_made)

    def test_pipeline_failure_gives_degraded_result(self):
        result = _orchestrator(parser=BrokenParser()).process(EstimationRequest(scope_text=SCENARIO_A))
        assert result.error == "ValueError: parser exploded"
        assert result.quote_items == []
        assert not result.should_proceed
        assert result.next_steps == ["Fix processing error", "Retry with simpler scope input"]
        assert result.scope_analysis.confidence.reasons == ("Processing error occurred",)
        assert result.confidence_summary.overall_confidence.reasons == ("Processing error",)
        assert result.estimated_duration == "0 minutes"

    def test_session_id_becomes_quote_id(self):
        result = _orchestrator().process(EstimationRequest(scope_text=SCENARIO_A, session_id="sess-42"))
        assert result.audit_trail.quote_id == "sess-42"


# ---------------------------------------------------------------------------
# Drawing inputs
# ---------------------------------------------------------------------------

class TestDrawingInputs:
    def test_elements_are_measured(self):
        result = _orchestrator().process(EstimationRequest(
            scope_text="Paint ceiling in living room",
            drawing_elements=[{"type": "ceiling", "description": "Living room", "dimensions": {"area": 30}}],
        ))
        quote_item = result.quote_items[0]
        assert quote_item.source_reference == "1 elements on drawings"
        assert quote_item.quantity == pytest.approx(33.0)

    def test_structural_elements_linked_to_timber_items(self):
        result = _orchestrator().process(EstimationRequest(
            scope_text="Supply timber bearers 12 lm",
            drawing_elements=[{"type": "structural", "location": "Structural plan", "dimensions": {"length": 6}}],
        ))
        assert result.quote_items[0].source_reference == "1 elements on drawings"

    def test_invalid_elements_are_skipped_and_recorded(self):
        result = _orchestrator().process(EstimationRequest(
            scope_text=SCENARIO_A,
            drawing_elements=["not an element", {"type": "wall", "dimensions": {"length": "long"}}],
        ))
        assert result.error is None
        skipped = [a for a in result.audit_trail.assumptions_made if a.startswith("Skipped drawing element")]
        assert len(skipped) == 2

    def test_drawing_analyses(self):
        drawing = DrawingAnalysis(
            id="dwg-1",
            file_name="A-101 Floor Plan.pdf",
            sheet_type="floor_plan",
            scale="1:100",
            elements=(BuildingElement(id="c1", type=ElementType.CEILING, location="Kitchen", dimensions={"area": 12}),),
        )
        result = _orchestrator().process(EstimationRequest(
            scope_text="Paint kitchen ceiling",
            drawing_analyses=[drawing],
        ))
        actions = result.audit_trail.actions
        assert actions[0].scope_item_id == "scope_analysis"
        assert actions[1].scope_item_id == "drawing_analysis"
        assert actions[1].confidence_factors == ("1 drawings analyzed", "1 elements found")
        assert actions[2].decision_type is DecisionType.QUANTITY_CALCULATION
        assert actions[2].reasoning.endswith(" at scale 1:100")
        assert result.drawing_analyses == [drawing]

    def test_drawing_context_prepended(self):
        class RecordingParser(BrokenParser):
            seen = None

            def parse(self, scope_text):
                RecordingParser.seen = scope_text
                raise ValueError("stop here")

        _orchestrator(parser=RecordingParser()).process(EstimationRequest(
            scope_text=SCENARIO_A,
            drawing_context="Floor plan shows 3 bedrooms",
        ))
        assert RecordingParser.seen == f"Floor plan shows 3 bedrooms\n\n{SCENARIO_A}"


class TestElementCoercion:
    def test_aliases_and_fraction_confidence(self):
        ids = SequentialIdGenerator()
        element = coerce_element({"type": "walls", "description": "North wall", "confidence": 0.8}, ids)
        assert element.type is ElementType.WALL
        assert element.location == "North wall"
        assert element.confidence.score == pytest.approx(80)
        assert element.id == "element-0001"

    @pytest.mark.parametrize(
        "label, element_type",
        [
            ("structural", ElementType.BEAM),
            ("kitchen", ElementType.OTHER),
            ("Door", ElementType.DOOR),
            ("gazebo", ElementType.OTHER),
        ],
    )
    def test_type_mapping(self, label, element_type):
        assert coerce_element({"type": label}, SequentialIdGenerator()).type is element_type

    def test_room_label_is_location(self):
        assert coerce_element({"type": "bathroom"}, SequentialIdGenerator()).location == "bathroom"

    def test_existing_elements_pass_through(self):
        element = BuildingElement(id="e1", type=ElementType.DOOR)
        assert coerce_element(element, SequentialIdGenerator()) is element

    def test_errors(self):
        with pytest.raises(ElementConversionError):
            coerce_element(42, SequentialIdGenerator())
        with pytest.raises(ElementConversionError):
            coerce_element({"type": "wall", "confidence": "high"}, SequentialIdGenerator())

    def test_coerce_elements_collects_skips(self):
        elements, skipped = coerce_elements([{"type": "door"}, None], SequentialIdGenerator())
        assert len(elements) == 1
        assert len(skipped) == 1


# ---------------------------------------------------------------------------
# Per-item outcomes
# ---------------------------------------------------------------------------

class TestOutcome:
    def test_success(self):
        item = ScopeItem(id="item-1", description="Install doors", measurement_type=MeasurementType.COUNT)
        outcome = calculate_item(MeasurementCalculator(), item, [])
        assert isinstance(outcome, CalculationSuccess)
        assert outcome.result.quantity == 2

    def test_failure(self):
        item = ScopeItem(id="item-1", description="Install doors")
        outcome = calculate_item(ExplodingCalculator(), item, [])
        assert isinstance(outcome, CalculationFailure)
        assert outcome.error == "RuntimeError: calculator exploded"

    @pytest.mark.parametrize("measurement_type", [MeasurementType.AREA, MeasurementType.COUNT])
    def test_non_finite_quantity_fails(self, measurement_type):
        item = ScopeItem(
            id="item-1",
            description="Supply tiles",
            measurement_type=measurement_type,
            quantity_requirements=QuantityRequirement(type=measurement_type, unit="x", base_quantity=float("inf")),
        )
        outcome = calculate_item(MeasurementCalculator(), item, [])
        assert isinstance(outcome, CalculationFailure)
        assert outcome.error.startswith("InvalidQuantityError:")

    @pytest.mark.parametrize(
        "description, method",
        [
            ("Timber deck", ConstructionMethod.TIMBER_FRAME),
            ("Steel portal frame", ConstructionMethod.STEEL_FRAME),
            ("Concrete slab", ConstructionMethod.CONCRETE),
            ("Face brick wall", ConstructionMethod.MASONRY),
            ("Paint", ConstructionMethod.TIMBER_FRAME),
        ],
    )
    def test_infer_construction_method(self, description, method):
        assert infer_construction_method(ScopeItem(id="i", description=description)) is method


# ---------------------------------------------------------------------------
# Summary helpers
# ---------------------------------------------------------------------------

class TestSummary:
    def test_buckets(self):
        items = [_quote_item(s, n) for n, s in enumerate([95, 85, 84, 70, 69, 40, 39, 0])]
        result = summary.confidence_summary(items, EstimatorSettings())
        assert result.high_confidence_items == 2
        assert result.medium_confidence_items == 2
        assert result.low_confidence_items == 2
        assert result.items_requiring_review == 2
        assert result.total_items == len(items)
        assert result.overall_confidence.uncertainty_factors == ("2 items require review",)

    def test_should_proceed_needs_items(self):
        assert not summary.should_proceed([], [], EstimatorSettings())

    def test_should_proceed_high_priority_limit(self):
        items = [_quote_item(95)]
        settings = EstimatorSettings()
        three = [_question(Priority.HIGH, n) for n in range(3)]
        assert summary.should_proceed(items, three, settings)
        assert not summary.should_proceed(items, three + [_question(Priority.HIGH, 3)], settings)

    def test_should_proceed_mean_and_review_share(self):
        settings = EstimatorSettings()
        assert not summary.should_proceed([_quote_item(60)], [], settings)
        items = [_quote_item(100, n) for n in range(2)] + [_quote_item(30, 2)]
        assert not summary.should_proceed(items, [], settings)

    def test_next_steps(self):
        items = [_quote_item(95, 0), _quote_item(50, 1)]
        questions = [_question(Priority.HIGH, 0), _question(Priority.MEDIUM, 1)]
        steps = summary.next_steps(items, questions, False, EstimatorSettings())
        assert steps == [
            "Answer 1 high-priority questions",
            "Review 1 medium-priority questions",
            "Review 1 items with low confidence",
            "Resolve questions and uncertainties before pricing",
            "Price 2 items using materials database",
        ]

    @pytest.mark.parametrize(
        "items, questions, expected",
        [
            (0, 0, "5 minutes"),
            (1, 0, "10 minutes"),
            (10, 25, "1 hour"),
            (10, 30, "1h 10m"),
            (10, 55, "2 hours"),
        ],
    )
    def test_estimated_duration(self, items, questions, expected):
        assert summary.estimated_duration(items, questions) == expected


class TestProjectName:
    def test_first_line(self):
        assert extract_project_name("Smith St kitchen\n- Remove cabinets") == "Smith St kitchen"

    def test_reference_when_first_line_too_long(self):
        text = "x" * 120 + "\nJob: 12 Smith St"
        assert extract_project_name(text) == "12 Smith St"

    def test_default(self):
        assert extract_project_name("") == "Construction Estimate"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

class TestEntryPoint:
    def test_process_estimation_request(self):
        result = process_estimation_request(
            SCENARIO_A,
            project_type="residential",
            location="Sydney NSW",
            orchestrator=_orchestrator(),
        )
        assert len(result.quote_items) == 1

    def test_invalid_request_is_degraded(self):
        result = process_estimation_request(
            SCENARIO_A,
            project_type="spaceship",
            orchestrator=_orchestrator(),
        )
        assert result.error is not None
        assert result.quote_items == []
        assert not result.should_proceed
