"""Builders for the multiple-choice options attached to questions.

Implications that cite a code take a ``codes`` table (role -> code name,
see :func:`scopeworks.compliance.standards.codes_for`) so the wording
follows the active jurisdiction.
"""

from __future__ import annotations

import re

from scopeworks.models.questions import CostImpact, QuestionOption
from scopeworks.questions import standards as s


def _slug(text: str) -> str:
    return re.sub(r"\s+", "_", text)


def _option(
    option_id: str,
    text: str,
    implications: tuple[str, ...],
    adjustment: float,
    cost: CostImpact = CostImpact.NEUTRAL,
) -> QuestionOption:
    return QuestionOption(
        id=option_id,
        text=text,
        implications=implications,
        confidence_adjustment=adjustment,
        cost_impact=cost,
    )


# ---------------------------------------------------------------------------
# Ambiguity interpretations
# ---------------------------------------------------------------------------

def interpretation_implications(interpretation: str) -> tuple[str, ...]:
    text = interpretation.lower()
    implications: list[str] = []
    if "standard" in text:
        implications += ["Cost-effective option", "Meets minimum requirements"]
    if "premium" in text or "high" in text:
        implications += ["Higher quality option", "Increased cost"]
    if "contractor" in text:
        implications += ["Professional selection", "Based on site conditions"]
    return tuple(implications)


def interpretation_adjustment(interpretation: str) -> float:
    text = interpretation.lower()
    if "standard" in text or "typical" in text:
        return 20
    if "premium" in text or "specific" in text:
        return 25
    if "contractor" in text or "professional" in text:
        return 15
    return 10


def interpretation_cost(interpretation: str) -> CostImpact:
    text = interpretation.lower()
    if "premium" in text or "high" in text or "certified" in text:
        return CostImpact.INCREASE
    if "budget" in text or "economy" in text:
        return CostImpact.DECREASE
    return CostImpact.NEUTRAL


def interpretation_options(interpretations: tuple[str, ...]) -> tuple[QuestionOption, ...]:
    return tuple(
        _option(
            f"option_{i}",
            text,
            interpretation_implications(text),
            interpretation_adjustment(text),
            interpretation_cost(text),
        )
        for i, text in enumerate(interpretations)
    )


# ---------------------------------------------------------------------------
# Material specification
# ---------------------------------------------------------------------------

def timber_options(description: str, codes: dict[str, str]) -> tuple[QuestionOption, ...]:
    table = s.MATERIAL_STANDARDS["timber"]
    if "structural" in description or "frame" in description:
        return tuple(
            _option(
                f"timber_{grade}",
                f"{grade} structural grade timber",
                (f"Meets {codes['timber_framing']} requirements for {grade}", "Suitable for structural applications"),
                20,
                CostImpact.INCREASE if grade in s.PREMIUM_TIMBER_GRADES else CostImpact.NEUTRAL,
            )
            for grade in table["structural"]
        )
    if "cladding" in description:
        return tuple(
            _option(
                f"cladding_{_slug(kind)}",
                kind,
                ("Suitable for external cladding", "Weather resistant"),
                15,
                CostImpact.INCREASE if kind in s.PREMIUM_CLADDING else CostImpact.NEUTRAL,
            )
            for kind in table["cladding"]
        )
    return (
        _option(
            "timber_standard",
            "Standard construction grade timber",
            ("Meets minimum building standards", "Cost-effective option"),
            10,
        ),
    )


def concrete_options(description: str, codes: dict[str, str]) -> tuple[QuestionOption, ...]:
    table = s.MATERIAL_STANDARDS["concrete"]
    if "residential" in description or "house" in description:
        return tuple(
            _option(
                f"concrete_{grade}",
                f"{grade} concrete",
                (f"{codes['residential_slabs']} compliant for residential use", f"{grade[1:]} MPa strength"),
                25,
                CostImpact.INCREASE if grade in s.PREMIUM_RESIDENTIAL_CONCRETE else CostImpact.NEUTRAL,
            )
            for grade in table["residential"]
        )
    return tuple(
        _option(
            f"concrete_{grade}",
            f"{grade} concrete",
            (f"{codes['concrete_structures']} compliant for commercial use", f"{grade[1:]} MPa strength"),
            25,
            CostImpact.INCREASE if int(grade[1:]) > s.COMMERCIAL_CONCRETE_BASELINE_MPA else CostImpact.NEUTRAL,
        )
        for grade in table["commercial"]
    )


def steel_options(description: str, codes: dict[str, str]) -> tuple[QuestionOption, ...]:
    """Steel grades for structural work, roofing products for roofs.

    Any other steel item gets the generic grade options.
    """
    table = s.MATERIAL_STANDARDS["steel"]
    if "structural" in description:
        return tuple(
            _option(
                f"steel_{grade}",
                f"{grade} structural steel",
                (f"{codes['steel_structures']} compliant", "High strength application"),
                20,
            )
            for grade in table["structural"]
        )
    if "roof" in description:
        return tuple(
            _option(
                f"roof_{kind}",
                f"{kind} roofing",
                ("Weather resistant", "Long-term durability"),
                15,
                CostImpact.INCREASE if kind in s.PREMIUM_ROOFING else CostImpact.NEUTRAL,
            )
            for kind in table["roofing"]
        )
    return generic_material_options()


def insulation_options(description: str, codes: dict[str, str]) -> tuple[QuestionOption, ...]:
    return tuple(
        _option(
            f"insulation_{r_value}",
            f"{r_value} bulk insulation",
            (f"Thermal performance: {r_value}", f"{codes['building_code']} compliance for the local climate"),
            20,
            CostImpact.INCREASE if float(r_value[1:]) > s.INSULATION_BASELINE_R_VALUE else CostImpact.NEUTRAL,
        )
        for r_value in s.MATERIAL_STANDARDS["insulation"]["bulk"]
    )


def generic_material_options() -> tuple[QuestionOption, ...]:
    return (
        _option(
            "standard_grade",
            "Standard construction grade",
            ("Meets minimum building standards", "Cost-effective"),
            10,
        ),
        _option(
            "premium_grade",
            "Premium/high-quality grade",
            ("Exceeds minimum standards", "Enhanced durability"),
            15,
            CostImpact.INCREASE,
        ),
        _option(
            "contractor_selection",
            "Contractor to select appropriate grade",
            ("Professional selection", "Based on specific requirements"),
            5,
        ),
    )


# (family, description keywords, option builder), checked in order.
MATERIAL_FAMILIES = (
    ("timber", ("timber", "wood"), timber_options),
    ("concrete", ("concrete",), concrete_options),
    ("steel", ("steel",), steel_options),
    ("insulation", ("insulation",), insulation_options),
)


def material_options(description: str, codes: dict[str, str]) -> tuple[str, tuple[QuestionOption, ...]]:
    """Return ``(material family, options)`` for a lowercased description."""
    for family, keywords, builder in MATERIAL_FAMILIES:
        if any(k in description for k in keywords):
            return family, builder(description, codes)
    return "general", generic_material_options()


# ---------------------------------------------------------------------------
# Quantity, location and method
# ---------------------------------------------------------------------------

def quantity_method_options(has_elements: bool, has_base_quantity: bool) -> tuple[QuestionOption, ...]:
    options: list[QuestionOption] = []
    if has_elements:
        options.append(_option(
            "measure_from_drawings",
            "Calculate from architectural drawings",
            ("Most accurate method", "Based on scaled drawings"),
            30,
        ))
    if has_base_quantity:
        options.append(_option(
            "use_specified_quantity",
            "Use quantity specified in scope",
            ("As per client specification", "May require verification"),
            20,
        ))
    options.append(_option(
        "provisional_allowance",
        "Use provisional allowance",
        ("Conservative estimate", "Subject to verification"),
        10,
        CostImpact.INCREASE,
    ))
    return tuple(options)


def location_options(locations: list[str]) -> tuple[QuestionOption, ...]:
    """One option per distinct location, then the whole-building fallbacks.

    Locations that differ only in spacing share an option id and are kept once.
    """
    by_id: dict[str, str] = {}
    for location in locations:
        text = " ".join(location.split())
        if text:
            by_id.setdefault(f"location_{_slug(text)}", text)

    options = [
        _option(
            option_id,
            text,
            ("Specific location identified", "Measurable from drawings"),
            20,
        )
        for option_id, text in by_id.items()
    ]
    options.append(_option(
        "throughout_building",
        "Throughout entire building",
        ("All applicable areas", "Comprehensive coverage"),
        15,
        CostImpact.INCREASE,
    ))
    options.append(_option(
        "as_shown_drawings",
        "As shown on drawings",
        ("Refer to architectural drawings", "Professional interpretation"),
        10,
    ))
    return tuple(options)


def installation_method_options(description: str) -> tuple[QuestionOption, ...]:
    if "wall" in description or "frame" in description:
        key, prefix, effect = "wall_framing", "wall", "Affects material requirements"
        suffix = " construction method"
    elif "roof" in description:
        key, prefix, effect = "roof_construction", "roof", "Affects structural requirements"
        suffix = " construction"
    else:
        return (
            _option(
                "standard_method",
                "Standard installation method",
                ("Industry standard approach", "Cost-effective"),
                10,
            ),
            _option(
                "contractor_method",
                "Contractor to determine method",
                ("Professional selection", "Based on site conditions"),
                5,
            ),
        )

    return tuple(
        _option(
            f"{prefix}_{_slug(method)}",
            method,
            (f"{method}{suffix}", effect),
            15,
            CostImpact.INCREASE if "Steel" in method else CostImpact.NEUTRAL,
        )
        for method in s.CONSTRUCTION_METHODS[key]
    )


def quantity_validation_options(quantity: float, unit: str) -> tuple[QuestionOption, ...]:
    return (
        _option(
            "confirm_quantity",
            f"Confirm {quantity:g} {unit}",
            ("Quantity as specified", "Proceed with calculation"),
            20,
        ),
        _option(
            "verify_from_drawings",
            "Verify quantity from drawings",
            ("Re-calculate from architectural drawings", "More accurate measurement"),
            25,
        ),
        _option(
            "request_clarification",
            "Request clarification from client",
            ("Confirm requirements", "Avoid estimation errors"),
            15,
        ),
    )


# ---------------------------------------------------------------------------
# Compliance
# ---------------------------------------------------------------------------

def structural_compliance_options(codes: dict[str, str]) -> tuple[QuestionOption, ...]:
    return (
        _option(
            "engineer_certified",
            "Structural engineer certified design",
            ("Professional certification", f"Complies with {codes['timber_framing']}/{codes['steel_structures']}"),
            30,
            CostImpact.INCREASE,
        ),
        _option(
            "standard_residential",
            "Standard residential construction",
            (f"{codes['timber_framing']} deemed-to-comply", "Standard span tables"),
            20,
        ),
        _option(
            "requires_assessment",
            "Requires structural assessment",
            ("Professional evaluation needed", "May require engineer"),
            10,
            CostImpact.INCREASE,
        ),
    )


def fire_compliance_options(codes: dict[str, str]) -> tuple[QuestionOption, ...]:
    return (
        _option(
            "fire_rated_system",
            "Fire-rated system required",
            ("Certified fire-rated materials", f"{codes['building_code']} compliance"),
            25,
            CostImpact.INCREASE,
        ),
        _option(
            "standard_materials",
            "Standard construction materials",
            ("No special fire rating", "Standard materials acceptable"),
            15,
        ),
        _option(
            "requires_verification",
            "Fire rating requires verification",
            ("Check building classification", f"Confirm {codes['building_code']} requirements"),
            10,
        ),
    )
