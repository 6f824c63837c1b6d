"""BuildingElement — a structured fact derived from architectural drawings.

Elements are produced by an external drawing-analysis collaborator.  The
estimation core only filters and measures them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from scopeworks.models.confidence import ConfidenceLevel, confidence_level


class ElementType(str, Enum):
    WALL = "wall"
    DOOR = "door"
    WINDOW = "window"
    BEAM = "beam"
    COLUMN = "column"
    FLOOR = "floor"
    CEILING = "ceiling"
    ROOF = "roof"
    OTHER = "other"


class ElementDimensions(BaseModel):
    """Optional metric dimensions of an element (metres / square metres)."""

    model_config = ConfigDict(frozen=True)

    length: float | None = None
    width: float | None = None
    height: float | None = None
    area: float | None = None


class BuildingElement(BaseModel):
    """One element found on a drawing."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: ElementType = ElementType.OTHER
    location: str = ""
    dimensions: ElementDimensions = Field(default_factory=ElementDimensions)
    material: str | None = None
    specifications: tuple[str, ...] = ()
    quantity: float = 1.0
    unit: str = "each"
    confidence: ConfidenceLevel = Field(default_factory=lambda: confidence_level(60))


class DrawingAnalysis(BaseModel):
    """Summary of one analysed drawing sheet, as supplied by the collaborator."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    file_name: str = ""
    sheet_type: str = "unknown"
    """'floor_plan', 'elevation', 'section', 'detail', 'site_plan' or 'unknown'."""

    scale: str = "unknown"
    elements: tuple[BuildingElement, ...] = ()
    notes: tuple[str, ...] = ()
    confidence: ConfidenceLevel = Field(default_factory=lambda: confidence_level(40))
