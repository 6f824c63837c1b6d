"""Static tables behind the clarification questions.

Material grades and construction methods common in New South Wales, and
the sanity limits used to flag implausible stated quantities.
"""

from __future__ import annotations

# Material family -> application -> grades / products, in display order.
MATERIAL_STANDARDS: dict[str, dict[str, tuple[str, ...]]] = {
    "timber": {
        "structural": ("F5", "F7", "F8", "F11", "F14", "F17"),
        "cladding": ("DAR Pine", "Spotted Gum", "Blackbutt", "Merbau", "Fibre Cement"),
        "flooring": ("Spotted Gum", "Blackbutt", "Jarrah", "Bamboo", "Engineered Timber"),
        "framing": ("MGP10", "MGP12", "MGP15", "LVL", "H1.2", "H2.5", "H3.2"),
    },
    "concrete": {
        "residential": ("N20", "N25", "N32"),
        "commercial": ("N32", "N40", "N50"),
        "reinforcement": ("SL92", "SL102", "SL82", "N12", "N16", "N20"),
    },
    "steel": {
        "structural": ("300PLUS", "C350L0", "C450L0"),
        "roofing": ("COLORBOND", "ZINCALUME", "Galvanised"),
        "framing": ("C350L0", "C450L0", "Galvanised RHS"),
    },
    "insulation": {
        "bulk": ("R1.5", "R2.5", "R3.5", "R5.0", "R6.0"),
        "reflective": ("Single sided", "Double sided", "Perforated"),
        "board": ("EPS", "XPS", "PIR", "Polyester"),
    },
}

CONSTRUCTION_METHODS: dict[str, tuple[str, ...]] = {
    "wall_framing": ("Timber frame", "Steel frame", "Concrete block", "Brick veneer"),
    "roof_construction": ("Timber truss", "Steel truss", "Rafter/beam", "Concrete slab"),
    "floor_construction": ("Concrete slab", "Suspended timber", "Steel frame", "Concrete suspended"),
    "cladding_systems": ("Weatherboard", "Fibre cement", "Brick", "Stone", "Metal", "Render"),
}

# Grades at or above these cost more than the baseline grade.
PREMIUM_TIMBER_GRADES = ("F17",)
PREMIUM_CLADDING = ("Spotted Gum",)
PREMIUM_RESIDENTIAL_CONCRETE = ("N32",)
COMMERCIAL_CONCRETE_BASELINE_MPA = 32
INSULATION_BASELINE_R_VALUE = 3.5
PREMIUM_ROOFING = ("COLORBOND",)

# (unit, comparison, limit, description keyword): a stated quantity is
# unusual when it crosses the limit and the keyword is present.
QUANTITY_SANITY_RULES: tuple[tuple[str, str, float, str], ...] = (
    ("m²", ">", 1000, "residential"),
    ("lm", ">", 500, "skirting"),
    ("each", ">", 50, "door"),
    ("m²", "<", 1, "floor"),
)


def is_quantity_unusual(quantity: float, unit: str, description: str) -> bool:
    text = description.lower()
    for rule_unit, comparison, limit, keyword in QUANTITY_SANITY_RULES:
        if unit != rule_unit or keyword not in text:
            continue
        if comparison == ">" and quantity > limit:
            return True
        if comparison == "<" and quantity < limit:
            return True
    return False
