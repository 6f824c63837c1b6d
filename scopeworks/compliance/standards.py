"""Regulatory-note lookups keyed by keyword family and jurisdiction.

Each rule pairs a keyword pattern with note templates.  Templates name codes
by role (``{timber_framing}``, ``{building_code}``, ...) and are filled from
the active jurisdiction's code table, so the same rule set produces
``AS 1684`` notes in New South Wales and generic wording elsewhere.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComplianceRule:
    """A keyword family and the notes it triggers."""

    family: str
    pattern: re.Pattern[str]
    notes: tuple[str, ...]


# Code names per role for each supported jurisdiction.
JURISDICTION_CODES: dict[str, dict[str, str]] = {
    "AU-NSW": {
        "timber_framing": "AS 1684",
        "steel_structures": "AS 4100",
        "residential_slabs": "AS 2870",
        "concrete_structures": "AS 3600",
        "masonry_structures": "AS 3700",
        "waterproofing": "AS 3740",
        "building_code": "NCC",
    },
    "generic": {
        "timber_framing": "The applicable timber framing code",
        "steel_structures": "The applicable steel structures code",
        "residential_slabs": "The applicable residential slab code",
        "concrete_structures": "The applicable concrete structures code",
        "masonry_structures": "The applicable masonry structures code",
        "waterproofing": "The applicable waterproofing code",
        "building_code": "The applicable building code",
    },
}

_LOCATION_JURISDICTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(nsw|new south wales|sydney|newcastle|wollongong)\b", re.I), "AU-NSW"),
)

# Notes attached to a whole scope analysis.
SCOPE_RULES: tuple[ComplianceRule, ...] = (
    ComplianceRule(
        family="structural",
        pattern=re.compile(r"\b(structural|beam|column|footing|foundation|load|bearing)\b", re.I),
        notes=(
            "Structural items require {timber_framing} compliance for timber framing",
            "Structural items require {steel_structures} compliance for steel framing",
        ),
    ),
    ComplianceRule(
        family="concrete",
        pattern=re.compile(r"\b(concrete|footing|slab|foundation)\b", re.I),
        notes=(
            "Concrete items require {residential_slabs} compliance for residential slabs",
            "Concrete items require {concrete_structures} compliance for concrete structures",
        ),
    ),
    ComplianceRule(
        family="fire",
        pattern=re.compile(r"\b(fire|rating|frl|bca|ncc)\b", re.I),
        notes=("Fire-rated items require {building_code} compliance verification",),
    ),
)

# Notes attached to a single measured item.
MEASUREMENT_RULES: tuple[ComplianceRule, ...] = (
    ComplianceRule(
        family="structural",
        pattern=re.compile(r"structural|load bearing", re.I),
        notes=(
            "{timber_framing} compliance required for timber framing",
            "Structural engineer certification may be required",
        ),
    ),
    ComplianceRule(
        family="concrete",
        pattern=re.compile(r"concrete|footing", re.I),
        notes=(
            "{residential_slabs} compliance required for residential slabs",
            "Minimum N20 concrete grade required",
        ),
    ),
    ComplianceRule(
        family="fire",
        pattern=re.compile(r"fire|rating", re.I),
        notes=(
            "{building_code} fire rating compliance required",
            "Certified fire-rated materials must be used",
        ),
    ),
    ComplianceRule(
        family="thermal",
        pattern=re.compile(r"insulation|thermal", re.I),
        notes=(
            "{building_code} thermal performance requirements apply",
            "R-value calculations required for Building Code compliance",
        ),
    ),
    ComplianceRule(
        family="waterproofing",
        pattern=re.compile(r"waterproof|membrane", re.I),
        notes=(
            "{waterproofing} waterproofing standards apply",
            "Licensed waterproofer required for wet areas",
        ),
    ),
)


def codes_for(jurisdiction: str | None) -> dict[str, str]:
    """Return the role -> code name table for *jurisdiction*."""
    if jurisdiction and jurisdiction in JURISDICTION_CODES:
        return JURISDICTION_CODES[jurisdiction]
    return JURISDICTION_CODES["generic"]


def resolve_jurisdiction(location: str | None, default: str) -> str:
    """Pick a jurisdiction from a free-text location, falling back to *default*."""
    if location:
        for pattern, jurisdiction in _LOCATION_JURISDICTIONS:
            if pattern.search(location):
                return jurisdiction
    return default


def format_note(template: str, jurisdiction: str | None) -> str:
    return template.format(**codes_for(jurisdiction))


def compliance_notes(
    texts: str | Iterable[str],
    rules: Iterable[ComplianceRule],
    jurisdiction: str | None = None,
) -> list[str]:
    """Collect notes for every rule whose pattern matches any of *texts*.

    Each family contributes its notes once, in rule order.
    """
    if isinstance(texts, str):
        texts = [texts]
    texts = list(texts)

    notes: list[str] = []
    for rule in rules:
        if any(rule.pattern.search(text) for text in texts):
            logger.debug("Compliance family '%s' matched", rule.family)
            notes.extend(format_note(t, jurisdiction) for t in rule.notes)
    return notes


# Framing note per construction method, added when an item is structural.
CONSTRUCTION_METHOD_NOTES: dict[str, str] = {
    "steel_frame": "{steel_structures} compliance required for steel framing",
    "concrete": "{concrete_structures} compliance required for concrete structures",
    "masonry": "{masonry_structures} compliance required for masonry",
}

NON_RESIDENTIAL_NOTE = "{building_code} requirements for non-residential buildings apply"


def measurement_notes(
    description: str,
    jurisdiction: str | None = None,
    construction_method: str | None = None,
    building_type: str | None = None,
) -> list[str]:
    """Notes for one measured item.

    Adds the construction method's framing code to structural items and a
    building-class note for non-residential projects.
    """
    notes = compliance_notes(description, MEASUREMENT_RULES, jurisdiction)
    structural = any(r.pattern.search(description) for r in MEASUREMENT_RULES if r.family == "structural")
    if structural and construction_method in CONSTRUCTION_METHOD_NOTES:
        notes.append(format_note(CONSTRUCTION_METHOD_NOTES[construction_method], jurisdiction))
    if building_type and building_type != "residential":
        notes.append(format_note(NON_RESIDENTIAL_NOTE, jurisdiction))
    return notes
