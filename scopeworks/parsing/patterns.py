"""Keyword tables driving scope classification.

Every classification cascade is declared here as data: ordered
``(name, pattern, weight)`` triples.  Control flow in :mod:`classify`
never hard-codes a keyword.
"""

from __future__ import annotations

import re

from scopeworks.models.scope import MeasurementType

KeywordRule = tuple[str, re.Pattern[str], float]


def _rx(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.I)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

ACTION_RULES: tuple[KeywordRule, ...] = (
    ("supply", _rx(r"\b(supply|provide|deliver|source|obtain|purchase|spec|specify)\b"), 1.0),
    ("install", _rx(r"\b(install|fix|mount|attach|connect|fit|place|position|erect|construct|build)\b"), 1.0),
    ("demolish", _rx(r"\b(demolish|remove|strip|clear|take|dismantle|break|cut)\b"), 1.0),
    ("prepare", _rx(r"\b(prepare|prep|clean|level|excavate|compact|prime|seal|treat)\b"), 1.0),
    ("repair", _rx(r"\b(repair|patch|fix|restore|replace|maintain|service)\b"), 1.0),
)

# Demolition / preparation win outright above this share of action signals.
DOMINANT_ACTION_SCORE = 0.7

# Supply vs install: one wins when it scores this many times the other.
ACTION_DOMINANCE_RATIO = 1.5

# ---------------------------------------------------------------------------
# Materials
# ---------------------------------------------------------------------------

MATERIAL_RULES: tuple[KeywordRule, ...] = (
    ("timber", _rx(r"\b(timber|pine|hardwood|lvl|glulam|treated|h[1-4]|f[1-4]|mg|mgo|plywood|ply|osb|particle|chipboard|mdf)\b"), 1.0),
    ("steel", _rx(r"\b(steel|galvanised|zincalume|colorbond|rhs|shs|uc|ub|pfc|angle|flat|bar|mesh|rebar|reinforcement)\b"), 1.0),
    ("concrete", _rx(r"\b(concrete|cement|mortar|grout|screed|render|n[1-9][0-9]|m[1-9][0-9]|mpa|slump|aggregate)\b"), 1.0),
    ("insulation", _rx(r"\b(insulation|bulk|reflective|polyester|glasswool|rockwool|eps|xps|pir|puf|sarking)\b"), 1.0),
    ("roofing", _rx(r"\b(roofing|tiles|metal|colorbond|gutters|downpipes|ridge|flashing|fascia|soffit|bargeboard)\b"), 1.0),
    ("cladding", _rx(r"\b(cladding|weatherboard|fibre|cement|brick|stone|render|eifs|acrylic|texture)\b"), 1.0),
    ("doors", _rx(r"\b(door|frame|architrave|jamb|head|sill|handle|lock|hinge|stopper|weather|seal)\b"), 1.0),
    ("windows", _rx(r"\b(window|glazing|glass|frame|sash|reveal|sill|head|jamb|flashing|seal|hardware)\b"), 1.0),
    ("hardware", _rx(r"\b(nails|screws|bolts|brackets|joist|hanger|strap|tie|anchor|fixing|fastener)\b"), 1.0),
    ("electrical", _rx(r"\b(electrical|power|lighting|switch|outlet|circuit|cable|conduit|meter|switchboard)\b"), 1.0),
    ("plumbing", _rx(r"\b(plumbing|pipe|fitting|valve|tap|basin|shower|toilet|drain|waste|vent)\b"), 1.0),
    ("flooring", _rx(r"\b(flooring|floor|slab|screed|tiles|carpet|timber|vinyl|laminate|underlay|skirting)\b"), 1.0),
)

# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------

MEASUREMENT_RULES: tuple[KeywordRule, ...] = (
    (MeasurementType.LINEAR.value, _rx(r"\b(lm|linear|metre|meter|lineal|length|perimeter|run|running)\b"), 1.0),
    (MeasurementType.AREA.value, _rx(r"(?<!\w)(m2|m²|sqm|square|area|coverage|face|surface)(?!\w)"), 1.0),
    (MeasurementType.VOLUME.value, _rx(r"(?<!\w)(m3|m³|cubic|volume|capacity|bulk|solid)(?!\w)"), 1.0),
    (MeasurementType.COUNT.value, _rx(r"\b(each|ea|no|nr|number|item|pcs|pieces|units|qty|quantity)\b"), 1.0),
)

# Weight units count as a quantity indicator but are not a measurement type.
WEIGHT_PATTERN = _rx(r"\b(kg|kilogram|tonne|ton|weight|mass)\b")

# A measurement type is chosen from keywords only above this share.
MEASUREMENT_SCORE_THRESHOLD = 0.3

# Used when no measurement keyword is decisive, checked in order.
MEASUREMENT_FALLBACKS: tuple[tuple[MeasurementType, re.Pattern[str]], ...] = (
    (MeasurementType.COUNT, _rx(r"\b(door|window|light|outlet|fixture)s?\b")),
    (MeasurementType.LINEAR, _rx(r"\b(skirting|architrave|beam|rafter|timber|steel)s?\b")),
    (MeasurementType.AREA, _rx(r"\b(floor|wall|ceiling|roof|cladding|paint)s?\b")),
    (MeasurementType.VOLUME, _rx(r"\b(concrete|insulation|excavation|fill)\b")),
)

# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

LOCATION_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("room", _rx(r"\b(kitchen|bathroom|bedroom|living|dining|laundry|garage|office|study|toilet|ensuite|pantry|entry|hallway|corridor|stairwell|balcony|deck|patio|verandah)\b")),
    ("level", _rx(r"\b(ground|first|second|third|upper|lower|basement|mezzanine|level|floor|storey)\b")),
    ("orientation", _rx(r"\b(north|south|east|west|front|rear|back|side|left|right|internal|external)\b")),
)

PLACEMENT_PATTERN = _rx(r"\b(install|place|position|mount|fix|attach)\b")

# ---------------------------------------------------------------------------
# Specifications and quantities
# ---------------------------------------------------------------------------

DIMENSION_PATTERN = _rx(r"\b\d+(?:\.\d+)?\s*x\s*\d+(?:\.\d+)?\s*(?:x\s*\d+(?:\.\d+)?)?\s*(?:mm|m)?\b")
PRODUCT_CODE_PATTERN = re.compile(r"\b[A-Z]{2,}\d{2,}")

# Explicit quantity phrasings, tried in order; group 1 is the number.
QUANTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    _rx(r"\b(\d+(?:\.\d+)?)\s*x\s+"),
    _rx(r"\b(\d+(?:\.\d+)?)\s*(?:linear\s+)?met(?:er|re)s?\b"),
    _rx(r"\b(\d+(?:\.\d+)?)\s*(?:square\s+)?met(?:er|re)s?\b"),
    _rx(r"\b(\d+(?:\.\d+)?)\s*(?:m2|m²|sqm|lm|m3|m³|each|ea|no|nr|units?)(?!\w)"),
    _rx(r"\b(\d+(?:\.\d+)?)\s+(?:units?|items?|pieces?|cabinets?|doors?|windows?)\b"),
    _rx(r"approximately\s+(\d+(?:\.\d+)?)"),
)

# Material keyword -> default waste allowance; first match wins.
WASTE_KEYWORDS: tuple[tuple[str, float], ...] = (
    ("timber", 0.10),
    ("tiles", 0.15),
    ("paint", 0.10),
    ("concrete", 0.05),
    ("insulation", 0.10),
)
DEFAULT_WASTE_FACTOR = 0.10

ACCESS_PATTERN = _rx(r"\b(confined|tight|restricted|difficult|awkward|high|scaffold)\b")
ACCESS_FACTOR = 1.2

COMPLEXITY_PATTERN = _rx(r"\b(complex|intricate|detailed|precision|custom|bespoke)\b")
COMPLEXITY_FACTOR = 1.3

QUANTITY_NOTE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (_rx(r"\b(including|include|with|plus|and)\b"), "Includes additional items - verify scope completeness"),
    (_rx(r"\b(excluding|exclude|not including|separate)\b"), "Excludes certain items - check for separate line items"),
    (_rx(r"\b(allowance|provisional|approximate|estimated)\b"), "Provisional quantity - verify with drawings"),
)
UNREADABLE_QUANTITY_NOTE = "Stated quantity could not be read - measure from drawings"

# ---------------------------------------------------------------------------
# Confidence signals
# ---------------------------------------------------------------------------

AMBIGUOUS_WORDS_PATTERN = _rx(
    r"\b(or|alternative|option|choice|maybe|possibly|might|could|either|various|different|several)\b"
)
MULTIPLE_OPTIONS_PATTERN = _rx(r"\b(or|alternative|option|choice)\b")
EXPLICIT_QUANTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    _rx(r"\b\d+\s*x\s+"),
    _rx(r"\b\d+(?:\.\d+)?\s*(?:linear\s+)?met(?:er|re)s?\b"),
)
EXPLICIT_DIMENSION_PATTERNS: tuple[re.Pattern[str], ...] = (
    _rx(r"\d+x\d+(?:x\d+)?mm"),
    _rx(r"\d+mm"),
)
COMPLEXITY_PENALTY_PATTERN = _rx(r"\b(complex|unusual|special|custom|bespoke|non-standard)\b")
STANDARD_ITEM_PATTERN = _rx(r"\b(standard|typical|common|regular|normal)\b")
CLEAR_ACTION_PATTERN = _rx(r"\b(supply and install|remove|demolish)\b")

# ---------------------------------------------------------------------------
# Ambiguity suggestions
# ---------------------------------------------------------------------------

MATERIAL_SUGGESTIONS: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
    (_rx(r"\b(floor|flooring)\b"), ("Timber flooring", "Vinyl flooring", "Ceramic tiles", "Carpet")),
    (_rx(r"\b(wall|cladding)\b"), ("Fibre cement", "Timber weatherboard", "Brick veneer", "Render")),
    (_rx(r"\b(roof|roofing)\b"), ("Colorbond steel", "Concrete tiles", "Terracotta tiles")),
)
DEFAULT_MATERIAL_SUGGESTIONS = ("Standard grade", "Premium grade", "Budget grade")

QUANTITY_INTERPRETATIONS = ("Measure from drawings", "Use provisional allowance", "Request clarification")
LOCATION_INTERPRETATIONS = ("Throughout building", "Specific areas only", "As shown on drawings")
