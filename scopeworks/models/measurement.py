"""Measurement calculator inputs and outputs."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from scopeworks.models.confidence import ConfidenceLevel


class ProjectType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class ConstructionMethod(str, Enum):
    TIMBER_FRAME = "timber_frame"
    STEEL_FRAME = "steel_frame"
    CONCRETE = "concrete"
    MASONRY = "masonry"


class MeasurementOptions(BaseModel):
    """Optional context for a quantity calculation."""

    model_config = ConfigDict(frozen=True)

    scale: str | None = None
    location_context: str | None = None
    building_type: ProjectType | None = None
    construction_method: ConstructionMethod | None = None


class MeasurementResult(BaseModel):
    """Quantity computed for one scope item.

    ``quantity == base_quantity * (1 + waste_factor) * access_factor *
    complexity_factor``, rounded to 2 decimals for continuous measurements
    and up to a whole number for count and assembly items.
    """

    model_config = ConfigDict(frozen=True)

    quantity: float
    unit: str
    calculation_method: str
    assumptions: tuple[str, ...] = ()
    confidence: ConfidenceLevel
    waste_included: bool = False
    base_quantity: float = 0.0
    waste_factor: float = 0.0
    access_factor: float = 1.0
    complexity_factor: float = 1.0
    compliance_notes: tuple[str, ...] = ()
