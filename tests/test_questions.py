"""Tests for clarification question generation."""

from __future__ import annotations

import pytest

from scopeworks.config import EstimatorSettings
from scopeworks.ids import SequentialIdGenerator
from scopeworks.models.confidence import confidence_level
from scopeworks.models.element import BuildingElement, ElementType
from scopeworks.models.measurement import ProjectType
from scopeworks.models.questions import CostImpact, QuestionContext, QuestionType
from scopeworks.models.scope import (
    Ambiguity,
    AmbiguityType,
    MeasurementType,
    Priority,
    QuantityRequirement,
    ScopeItem,
    WorkCategory,
)
from scopeworks.questions import QuestionGenerator, is_quantity_unusual
from scopeworks.questions import options as opt
from scopeworks.compliance.standards import codes_for


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _item(
    description,
    score=50,
    uncertainties=(),
    specifications=(),
    category=WorkCategory.SUPPLY,
    measurement_type=MeasurementType.AREA,
    base_quantity=None,
    unit="m²",
):
    return ScopeItem(
        id="item-1",
        description=description,
        category=category,
        specifications=tuple(specifications),
        measurement_type=measurement_type,
        quantity_requirements=QuantityRequirement(type=measurement_type, unit=unit, base_quantity=base_quantity),
        confidence=confidence_level(score, uncertainty_factors=uncertainties),
    )


@pytest.fixture
def generator():
    return QuestionGenerator(id_generator=SequentialIdGenerator())


# ---------------------------------------------------------------------------
# Question families
# ---------------------------------------------------------------------------

class TestGenerate:
    def test_clear_item_needs_no_questions(self, generator):
        item = _item("Supply timber battens", score=95, specifications=["timber: timber"])
        result = generator.generate(item)
        assert result.questions == []
        assert result.should_proceed
        assert result.confidence_threshold_met

    def test_ambiguity_becomes_question(self, generator):
        item = _item("Install new stuff", score=95, specifications=["x"])
        ambiguity = Ambiguity(
            id="amb-1",
            item_id=item.id,
            type=AmbiguityType.MATERIAL_SPECIFICATION,
            description="Material specification unclear or missing",
            possible_interpretations=("Standard grade", "Premium grade"),
            suggested_question='What specific material should be used for "Install new stuff"?',
            confidence_impact=-30,
            priority=Priority.HIGH,
        )
        context = QuestionContext(drawing_refs=("A-101.pdf",), project_type=ProjectType.RESIDENTIAL)
        result = generator.generate(item, [], [ambiguity], context)

        question = result.questions[0]
        assert question.question == ambiguity.suggested_question
        assert question.type is QuestionType.CLARIFICATION
        assert question.priority is Priority.HIGH
        assert question.drawing_reference == "A-101.pdf"
        assert "Project type: residential." in question.context
        assert [o.text for o in question.options] == ["Standard grade", "Premium grade"]
        assert question.options[1].cost_impact is CostImpact.INCREASE
        assert not result.should_proceed
        assert result.blocking_issues == ["Material specification unclear or missing"]

    def test_uncertainties_drive_questions(self, generator):
        item = _item(
            "Paint ceiling",
            score=60,
            uncertainties=["Quantity calculation method unclear", "Location not specified"],
            specifications=["x"],
        )
        result = generator.generate(item)
        texts = [q.question for q in result.questions]
        assert 'How should I calculate the quantity for "Paint ceiling"?' in texts
        assert 'Where specifically should "Paint ceiling" be installed?' in texts
        assert not result.confidence_threshold_met

    def test_sorted_by_priority(self, generator):
        item = _item(
            "Install structural timber wall frame",
            score=40,
            uncertainties=["Location not specified", "Material type unclear"],
            category=WorkCategory.INSTALL,
        )
        priorities = [q.priority for q in generator.generate(item).questions]
        order = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
        assert priorities == sorted(priorities, key=order.get)
        assert priorities[0] is Priority.HIGH
        assert priorities[-1] is Priority.MEDIUM

    def test_every_question_carries_item_id(self, generator):
        item = _item("Fire rated structural wall", score=30, uncertainties=["Material type unclear"])
        questions = generator.generate(item).questions
        assert questions
        assert {q.scope_item_id for q in questions} == {"item-1"}
        assert len({q.id for q in questions}) == len(questions)

    def test_missing_specifications_ask_for_material(self, generator):
        item = _item("Supply structural timber beam", score=95)
        questions = generator.generate(item).questions
        material = [q for q in questions if q.question.startswith("What specific timber material")]
        assert len(material) == 1
        assert material[0].options[0].id == "timber_F5"
        assert material[0].options[-1].cost_impact is CostImpact.INCREASE

    def test_installation_question_for_install_items(self, generator):
        item = _item("Install roof battens", score=95, specifications=["x"], category=WorkCategory.INSTALL)
        questions = generator.generate(item).questions
        assert [q.type for q in questions] == [QuestionType.SPECIFICATION]
        assert questions[0].options[0].text == "Timber truss"

    def test_unusual_quantity_validated(self, generator):
        item = _item(
            "Supply door",
            score=95,
            specifications=["x"],
            measurement_type=MeasurementType.COUNT,
            base_quantity=60,
            unit="each",
        )
        questions = generator.generate(item).questions
        assert [q.type for q in questions] == [QuestionType.ASSUMPTION_VALIDATION]
        assert questions[0].options[0].text == "Confirm 60 each"

    def test_compliance_codes_follow_location(self, generator):
        item = _item("Supply structural beam", score=95, specifications=["x"])
        sydney = generator.generate(item, context=QuestionContext(location="Sydney")).questions
        assert "AS 1684" in sydney[0].context

        generic = QuestionGenerator(
            id_generator=SequentialIdGenerator(),
            settings=EstimatorSettings(jurisdiction="generic"),
        )
        elsewhere = generic.generate(item, context=QuestionContext(location="Perth")).questions
        assert "The applicable timber framing code" in elsewhere[0].context

    def test_drawing_references_list_element_types(self, generator):
        item = _item("Paint walls", score=50, uncertainties=["Location not specified"], specifications=["x"])
        elements = [
            BuildingElement(id="w1", type=ElementType.WALL, location="Living"),
            BuildingElement(id="w2", type=ElementType.WALL, location="Bed 1"),
        ]
        question = generator.generate(item, elements).questions[0]
        assert question.visual_references == ("Elements found: wall",)
        assert [o.text for o in question.options][:2] == ["Living", "Bed 1"]


    def test_location_question_merges_spacing_variants(self, generator):
        item = _item("Paint walls", score=50, uncertainties=["Location not specified"], specifications=["x"])
        elements = [
            BuildingElement(id="w1", type=ElementType.WALL, location="Level 1  North"),
            BuildingElement(id="w2", type=ElementType.WALL, location="Level 1 North"),
        ]
        question = generator.generate(item, elements).questions[0]
        ids = [o.id for o in question.options]
        assert len(ids) == len(set(ids))
        assert ids.count("location_Level_1_North") == 1

# ---------------------------------------------------------------------------
# Option builders and sanity rules
# ---------------------------------------------------------------------------

class TestOptions:
    def test_material_family_routing(self):
        codes = codes_for("AU-NSW")
        assert opt.material_options("supply concrete to residential slab", codes)[0] == "concrete"
        assert opt.material_options("steel lintel", codes)[1] == opt.generic_material_options()
        family, options = opt.material_options("ceiling insulation", codes)
        assert family == "insulation"
        assert options[-1].cost_impact is CostImpact.INCREASE
        assert opt.material_options("paint", codes)[0] == "general"

    def test_commercial_concrete_costs(self):
        options = opt.concrete_options("commercial slab", codes_for("AU-NSW"))
        assert [o.cost_impact for o in options] == [CostImpact.NEUTRAL, CostImpact.INCREASE, CostImpact.INCREASE]

    def test_quantity_method_options(self):
        ids = [o.id for o in opt.quantity_method_options(True, False)]
        assert ids == ["measure_from_drawings", "provisional_allowance"]

    def test_location_options_unique_ids(self):
        options = opt.location_options(["Level 1  North", "Level 1 North", " Level 1 North ", "Kitchen", "  "])
        ids = [o.id for o in options]
        assert len(ids) == len(set(ids))
        assert [o.text for o in options][:2] == ["Level 1 North", "Kitchen"]
        assert ids[:2] == ["location_Level_1_North", "location_Kitchen"]

    @pytest.mark.parametrize(
        "quantity, unit, description, unusual",
        [
            (1200, "m²", "residential roof", True),
            (800, "m²", "residential roof", False),
            (600, "lm", "skirting", True),
            (60, "each", "door handles", True),
            (0.5, "m²", "floor patch", True),
            (0.5, "m²", "wall patch", False),
        ],
    )
    def test_sanity_rules(self, quantity, unit, description, unusual):
        assert is_quantity_unusual(quantity, unit, description) is unusual
