"""Waste, access and complexity factor lookups by description keyword."""

from __future__ import annotations

from scopeworks.measurement.tables import FactorRule, MeasurementTables


def waste_factor(description: str, tables: MeasurementTables) -> float:
    """Material waste allowance for *description*.

    The first material family named in the description selects the table;
    within it the first sub-type named wins, otherwise the family's first
    entry applies.
    """
    text = description.lower()
    for material, subtypes in tables.waste_factors.items():
        if material not in text:
            continue
        for subtype, factor in subtypes.items():
            if subtype in text:
                return factor
        return next(iter(subtypes.values()), tables.default_waste_factor)
    return tables.default_waste_factor


def _first_rule(text: str, rules: tuple[FactorRule, ...], default: float) -> float:
    for _, triggers, factor in rules:
        if any(trigger in text for trigger in triggers):
            return factor
    return default


def access_factor(description: str, tables: MeasurementTables) -> float:
    return _first_rule(description.lower(), tables.access_factors, tables.default_access_factor)


def complexity_factor(description: str, tables: MeasurementTables) -> float:
    return _first_rule(description.lower(), tables.complexity_factors, tables.default_complexity_factor)
