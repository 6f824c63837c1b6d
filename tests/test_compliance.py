"""Tests for jurisdiction-aware compliance notes."""

from __future__ import annotations

from scopeworks.compliance import (
    MEASUREMENT_RULES,
    SCOPE_RULES,
    compliance_notes,
    measurement_notes,
    resolve_jurisdiction,
)
from scopeworks.compliance.standards import (
    CONSTRUCTION_METHOD_NOTES,
    JURISDICTION_CODES,
    NON_RESIDENTIAL_NOTE,
    codes_for,
)


class TestJurisdiction:
    def test_resolve_from_location(self):
        assert resolve_jurisdiction("Parramatta, Sydney", "generic") == "AU-NSW"
        assert resolve_jurisdiction("new south wales", "generic") == "AU-NSW"

    def test_resolve_falls_back(self):
        assert resolve_jurisdiction("Melbourne VIC", "generic") == "generic"
        assert resolve_jurisdiction(None, "AU-NSW") == "AU-NSW"

    def test_unknown_jurisdiction_uses_generic_codes(self):
        assert codes_for("XX") == codes_for("generic")
        assert codes_for("AU-NSW")["timber_framing"] == "AS 1684"

    def test_every_template_fills_from_every_code_table(self):
        templates = [note for rule in (*SCOPE_RULES, *MEASUREMENT_RULES) for note in rule.notes]
        templates += [*CONSTRUCTION_METHOD_NOTES.values(), NON_RESIDENTIAL_NOTE]
        for codes in JURISDICTION_CODES.values():
            assert set(codes) == set(JURISDICTION_CODES["AU-NSW"])
            for template in templates:
                assert "{" not in template.format(**codes)


class TestScopeNotes:
    def test_structural_notes_name_codes(self):
        notes = compliance_notes(["Install structural beam"], SCOPE_RULES, "AU-NSW")
        assert "Structural items require AS 1684 compliance for timber framing" in notes
        assert "Structural items require AS 4100 compliance for steel framing" in notes

    def test_family_contributes_once(self):
        notes = compliance_notes(["concrete slab", "concrete footing"], SCOPE_RULES, "AU-NSW")
        assert len(notes) == len(set(notes))
        assert sum("AS 2870" in n for n in notes) == 1

    def test_generic_wording(self):
        notes = compliance_notes("Fire rated door", SCOPE_RULES, "generic")
        assert notes == ["Fire-rated items require The applicable building code compliance verification"]

    def test_no_match(self):
        assert compliance_notes("Paint bedroom", SCOPE_RULES, "AU-NSW") == []


class TestMeasurementNotes:
    def test_insulation(self):
        notes = compliance_notes("Ceiling insulation batts", MEASUREMENT_RULES, "AU-NSW")
        assert notes[0] == "NCC thermal performance requirements apply"

    def test_construction_method_note_for_structural_items(self):
        notes = measurement_notes("Structural steel beam", "AU-NSW", construction_method="steel_frame")
        assert "AS 4100 compliance required for steel framing" in notes

    def test_construction_method_ignored_for_non_structural(self):
        notes = measurement_notes("Paint ceiling", "AU-NSW", construction_method="steel_frame")
        assert notes == []

    def test_non_residential_note(self):
        notes = measurement_notes("Paint ceiling", "AU-NSW", building_type="commercial")
        assert notes == ["NCC requirements for non-residential buildings apply"]
        assert measurement_notes("Paint ceiling", "AU-NSW", building_type="residential") == []
