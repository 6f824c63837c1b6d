"""Embedded default measurement constants.

Waste allowances, access and complexity multipliers and geometric
defaults for residential and light-commercial work in New South Wales.
They are empirical values carried over from estimator practice and are
exposed for override through :class:`~scopeworks.measurement.tables.MeasurementTables`.
"""

from __future__ import annotations

# Material family -> sub-type -> waste allowance.  Both levels are ordered:
# the first family found in a description wins, then its first sub-type
# found, else the family's first entry.
WASTE_FACTORS: dict[str, dict[str, float]] = {
    "timber": {
        "framing": 0.10,
        "flooring": 0.08,
        "cladding": 0.12,
        "trim": 0.15,
        "decking": 0.10,
    },
    "steel": {
        "framing": 0.05,
        "roofing": 0.08,
        "cladding": 0.10,
        "reinforcement": 0.06,
    },
    "concrete": {
        "footings": 0.05,
        "slabs": 0.03,
        "walls": 0.08,
        "columns": 0.10,
    },
    "masonry": {
        "brickwork": 0.05,
        "blockwork": 0.08,
        "stone": 0.10,
    },
    "roofing": {
        "tiles": 0.12,
        "metal": 0.08,
        "membrane": 0.10,
    },
    "insulation": {
        "bulk": 0.10,
        "reflective": 0.08,
        "board": 0.12,
    },
    "cladding": {
        "weatherboard": 0.12,
        "fibre_cement": 0.10,
        "metal": 0.08,
    },
    "flooring": {
        "timber": 0.08,
        "tiles": 0.10,
        "vinyl": 0.05,
        "carpet": 0.08,
    },
}

DEFAULT_WASTE_FACTOR = 0.10

# Breakage/extras allowance for counted items.
COUNT_WASTE_FACTOR = 0.05

# Assemblies combine several trades and carry a higher allowance.
ASSEMBLY_WASTE_FACTOR = 0.15

# (name, trigger substrings, multiplier), checked in order; the first hit wins.
# Crane comes first: "crane to upper level" is 1.5, not the first-floor 1.1.
ACCESS_FACTORS: tuple[tuple[str, tuple[str, ...], float], ...] = (
    ("crane_required", ("crane",), 1.5),
    ("ground_level", ("ground", "slab"), 1.0),
    ("first_floor", ("first floor", "upper"), 1.1),
    ("second_floor", ("second floor", "high"), 1.2),
    ("confined_space", ("confined", "tight", "restricted"), 1.3),
    ("difficult_access", ("difficult", "awkward"), 1.4),
)
DEFAULT_ACCESS_FACTOR = 1.0

COMPLEXITY_FACTORS: tuple[tuple[str, tuple[str, ...], float], ...] = (
    ("custom", ("custom", "bespoke", "unique"), 1.8),
    ("complex", ("complex", "intricate", "detailed"), 1.5),
    ("medium", ("medium", "moderate"), 1.2),
)
DEFAULT_COMPLEXITY_FACTOR = 1.0

# Metres; used when a wall element has no height.
STANDARD_CEILING_HEIGHT = 2.7

# Plan area -> sloped roof area.
ROOF_PITCH_FACTOR = 1.4

# Metres; used for wall volumes when the description states no thickness.
DEFAULT_THICKNESS = 0.1
