"""Overridable measurement configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from scopeworks.measurement import seed_data

FactorRule = tuple[str, tuple[str, ...], float]


class MeasurementTables(BaseModel):
    """Every numeric constant the calculator uses.

    Defaults come from :mod:`scopeworks.measurement.seed_data`.  Override
    by passing keyword arguments, or derive a variant with
    ``tables.model_copy(update={...})``.
    """

    model_config = ConfigDict(frozen=True)

    waste_factors: dict[str, dict[str, float]] = Field(
        default_factory=lambda: {k: dict(v) for k, v in seed_data.WASTE_FACTORS.items()}
    )
    default_waste_factor: float = seed_data.DEFAULT_WASTE_FACTOR
    count_waste_factor: float = seed_data.COUNT_WASTE_FACTOR
    assembly_waste_factor: float = seed_data.ASSEMBLY_WASTE_FACTOR

    access_factors: tuple[FactorRule, ...] = seed_data.ACCESS_FACTORS
    default_access_factor: float = seed_data.DEFAULT_ACCESS_FACTOR
    complexity_factors: tuple[FactorRule, ...] = seed_data.COMPLEXITY_FACTORS
    default_complexity_factor: float = seed_data.DEFAULT_COMPLEXITY_FACTOR

    standard_ceiling_height: float = seed_data.STANDARD_CEILING_HEIGHT
    roof_pitch_factor: float = seed_data.ROOF_PITCH_FACTOR
    default_thickness: float = seed_data.DEFAULT_THICKNESS

    # Measurement confidence model.
    base_confidence: float = 70
    elements_found_bonus: float = 20
    no_elements_penalty: float = 30
    quantity_found_bonus: float = 10
    no_quantity_penalty: float = 20
    assumption_penalty: float = 5
