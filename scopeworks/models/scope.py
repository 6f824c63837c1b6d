"""Scope records — the structured output of the scope parser.

ScopeItem and Ambiguity are frozen: downstream components attach derived
results alongside them and never rewrite them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from scopeworks.models.confidence import ConfidenceLevel, confidence_level


class WorkCategory(str, Enum):
    """What kind of work a scope item asks for."""

    SUPPLY = "supply"
    INSTALL = "install"
    SUPPLY_INSTALL = "supply_install"
    DEMOLITION = "demolition"
    PREPARATION = "preparation"


class MeasurementType(str, Enum):
    """How an item is measured."""

    LINEAR = "linear"
    AREA = "area"
    VOLUME = "volume"
    COUNT = "count"
    ASSEMBLY = "assembly"


# Default unit reported for each measurement type.
DEFAULT_UNITS: dict[MeasurementType, str] = {
    MeasurementType.LINEAR: "lm",
    MeasurementType.AREA: "m²",
    MeasurementType.VOLUME: "m³",
    MeasurementType.COUNT: "each",
    MeasurementType.ASSEMBLY: "item",
}


class AmbiguityType(str, Enum):
    MATERIAL_SPECIFICATION = "material_specification"
    QUANTITY_UNCLEAR = "quantity_unclear"
    LOCATION_UNDEFINED = "location_undefined"
    METHOD_AMBIGUOUS = "method_ambiguous"


class Priority(str, Enum):
    """Question / ambiguity priority.  Sort order is high, medium, low."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_ORDER: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class QuantityRequirement(BaseModel):
    """How the quantity of an item should be measured and adjusted."""

    model_config = ConfigDict(frozen=True)

    type: MeasurementType
    unit: str
    base_quantity: float | None = None
    """Quantity stated explicitly in the scope text, if any."""

    waste_factor: float = 0.10
    access_factor: float = 1.0
    complexity_factor: float = 1.0
    notes: tuple[str, ...] = ()


class ScopeItem(BaseModel):
    """One unit of work extracted from the scope text."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    category: WorkCategory = WorkCategory.SUPPLY_INSTALL
    location: str | None = None
    specifications: tuple[str, ...] = ()
    quantity_requirements: QuantityRequirement | None = None
    measurement_type: MeasurementType = MeasurementType.ASSEMBLY
    confidence: ConfidenceLevel = Field(default_factory=lambda: confidence_level(0))

    @property
    def base_quantity(self) -> float | None:
        if self.quantity_requirements is None:
            return None
        return self.quantity_requirements.base_quantity


class Ambiguity(BaseModel):
    """A gap in the scope text tied to one ScopeItem by ``item_id``."""

    model_config = ConfigDict(frozen=True)

    id: str
    item_id: str
    type: AmbiguityType
    description: str
    possible_interpretations: tuple[str, ...] = ()
    suggested_question: str = ""
    confidence_impact: float = 0.0
    priority: Priority = Priority.MEDIUM


class ScopeAnalysis(BaseModel):
    """Result of parsing one scope text."""

    id: str
    original_scope: str = ""
    items: list[ScopeItem] = Field(default_factory=list)
    ambiguities: list[Ambiguity] = Field(default_factory=list)
    completeness: float = 0.0
    """Mean structural completeness of the items, 0–100."""

    confidence: ConfidenceLevel = Field(default_factory=lambda: confidence_level(0))
    compliance_notes: list[str] = Field(default_factory=list)

    def ambiguities_for(self, item_id: str) -> list[Ambiguity]:
        """Return the ambiguities raised against *item_id*, in detection order."""
        return [a for a in self.ambiguities if a.item_id == item_id]
