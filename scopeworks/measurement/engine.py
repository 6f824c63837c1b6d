"""MeasurementCalculator — quantity takeoff for one scope item.

Usage::

    from scopeworks.measurement import MeasurementCalculator

    calculator = MeasurementCalculator()
    result = calculator.calculate(item, elements)

``calculate`` is a pure function of its arguments: the same item, elements
and options always give the same :class:`MeasurementResult`.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable

from scopeworks.compliance import measurement_notes, resolve_jurisdiction
from scopeworks.config import DEFAULT_JURISDICTION
from scopeworks.errors import InvalidQuantityError, UnsupportedMeasurementTypeError
from scopeworks.measurement import factors, geometry
from scopeworks.measurement.relevance import is_relevant
from scopeworks.measurement.tables import MeasurementTables
from scopeworks.models.confidence import ConfidenceLevel, confidence_level
from scopeworks.models.element import BuildingElement, ElementType
from scopeworks.models.measurement import MeasurementOptions, MeasurementResult
from scopeworks.models.scope import DEFAULT_UNITS, MeasurementType, ScopeItem

logger = logging.getLogger(__name__)

_NO_ELEMENTS = "No relevant building elements found on drawings"
_SCOPE_QUANTITY = "Using scope-specified quantity (no drawing reference)"
_VOLUME_MATERIALS = re.compile(r"\b(concrete|fill|insulation)\b", re.I)

RelevanceRule = Callable[[ScopeItem, BuildingElement], bool]


@dataclass
class _Takeoff:
    """Raw quantity from one measurement branch, before adjustment."""

    base_quantity: float = 0.0
    method: str = ""
    assumptions: list[str] = field(default_factory=list)


class MeasurementCalculator:
    """Dispatches on ``item.measurement_type`` to one of five takeoff branches.

    Parameters
    ----------
    tables:
        Numeric constants.  Defaults to :class:`MeasurementTables`.
    jurisdiction:
        Jurisdiction for compliance notes when the options carry no
        recognisable location.
    relevance:
        Predicate deciding whether an element is measured for an item.
        Defaults to :func:`scopeworks.measurement.relevance.is_relevant`.
    """

    def __init__(
        self,
        tables: MeasurementTables | None = None,
        jurisdiction: str = DEFAULT_JURISDICTION,
        relevance: RelevanceRule | None = None,
    ) -> None:
        self.tables = tables or MeasurementTables()
        self.jurisdiction = jurisdiction
        self._relevance = relevance or is_relevant
        self._branches: dict[MeasurementType, Callable[[ScopeItem, list[BuildingElement]], _Takeoff]] = {
            MeasurementType.LINEAR: self._linear,
            MeasurementType.AREA: self._area,
            MeasurementType.VOLUME: self._volume,
            MeasurementType.COUNT: self._count,
            MeasurementType.ASSEMBLY: self._assembly,
        }

    def calculate(
        self,
        item: ScopeItem,
        elements: Iterable[BuildingElement] = (),
        options: MeasurementOptions | None = None,
    ) -> MeasurementResult:
        """Compute the adjusted quantity for *item*.

        Raises
        ------
        UnsupportedMeasurementTypeError
            If the item's measurement type has no takeoff branch.
        InvalidQuantityError
            If the adjusted quantity is not a finite number.
        """
        options = options or MeasurementOptions()
        branch = self._branches.get(item.measurement_type)
        if branch is None:
            raise UnsupportedMeasurementTypeError(item.measurement_type)

        relevant = [e for e in elements if self._relevance(item, e)]
        takeoff = branch(item, relevant)
        if relevant and options.scale and options.scale != "unknown":
            takeoff.method = f"{takeoff.method} at scale {options.scale}"

        waste = self._waste_factor(item)
        access = factors.access_factor(item.description, self.tables)
        complexity = factors.complexity_factor(item.description, self.tables)
        adjusted = takeoff.base_quantity * (1 + waste) * access * complexity
        if not math.isfinite(adjusted):
            raise InvalidQuantityError(item.id, adjusted)

        if item.measurement_type in (MeasurementType.COUNT, MeasurementType.ASSEMBLY):
            # Strip float noise before ceil.
            quantity = float(math.ceil(round(adjusted, 6)))
        else:
            quantity = round(adjusted, 2)

        jurisdiction = resolve_jurisdiction(options.location_context, self.jurisdiction)
        notes = measurement_notes(
            item.description,
            jurisdiction,
            options.construction_method.value if options.construction_method else None,
            options.building_type.value if options.building_type else None,
        )

        logger.debug(
            "Item %s (%s): base=%s adjusted=%s from %d elements",
            item.id, item.measurement_type.value, takeoff.base_quantity, quantity, len(relevant),
        )

        return MeasurementResult(
            quantity=quantity,
            unit=DEFAULT_UNITS[item.measurement_type],
            calculation_method=takeoff.method,
            assumptions=tuple(takeoff.assumptions),
            confidence=self._confidence(item, takeoff, len(relevant)),
            waste_included=waste > 0,
            base_quantity=takeoff.base_quantity,
            waste_factor=waste,
            access_factor=access,
            complexity_factor=complexity,
            compliance_notes=tuple(notes),
        )

    # -- factors ----------------------------------------------------------

    def _waste_factor(self, item: ScopeItem) -> float:
        if item.measurement_type is MeasurementType.COUNT:
            return self.tables.count_waste_factor
        if item.measurement_type is MeasurementType.ASSEMBLY:
            return self.tables.assembly_waste_factor
        return factors.waste_factor(item.description, self.tables)

    def _confidence(self, item: ScopeItem, takeoff: _Takeoff, found: int) -> ConfidenceLevel:
        t = self.tables
        score = t.base_confidence
        score += t.elements_found_bonus if found else -t.no_elements_penalty
        score += t.quantity_found_bonus if takeoff.base_quantity > 0 else -t.no_quantity_penalty
        score -= t.assumption_penalty * len(takeoff.assumptions)
        score = (score + item.confidence.score) / 2

        reasons = [
            f"{found} building elements found on drawings",
            f"Base quantity: {takeoff.base_quantity:g}",
            f"{len(takeoff.assumptions)} assumptions made",
        ]
        return confidence_level(score, reasons, takeoff.assumptions)

    # -- takeoff branches -------------------------------------------------

    @staticmethod
    def _from_scope(item: ScopeItem, default: float, method: str = _SCOPE_QUANTITY) -> _Takeoff:
        return _Takeoff(
            base_quantity=item.base_quantity or default,
            method=method,
            assumptions=[_NO_ELEMENTS],
        )

    def _linear(self, item: ScopeItem, elements: list[BuildingElement]) -> _Takeoff:
        if not elements:
            return self._from_scope(item, 0.0)

        takeoff = _Takeoff()
        for element in elements:
            if element.type is ElementType.WALL:
                takeoff.base_quantity += geometry.wall_perimeter(element)
                takeoff.method = "Wall perimeter calculation from drawings"
            elif element.type in (ElementType.BEAM, ElementType.COLUMN):
                takeoff.base_quantity += element.dimensions.length or 0.0
                takeoff.method = "Structural element length from drawings"
            else:
                takeoff.base_quantity += element.dimensions.length or 0.0
                takeoff.method = "Linear measurement from drawings"
        return takeoff

    def _area(self, item: ScopeItem, elements: list[BuildingElement]) -> _Takeoff:
        if not elements:
            return self._from_scope(item, 0.0)

        takeoff = _Takeoff()
        for element in elements:
            if element.type is ElementType.WALL:
                takeoff.base_quantity += geometry.wall_area(element, self.tables)
                takeoff.method = "Wall area calculation from drawings"
            elif element.type in (ElementType.FLOOR, ElementType.CEILING):
                takeoff.base_quantity += geometry.plan_area(element)
                takeoff.method = "Floor/ceiling area calculation from drawings"
            elif element.type is ElementType.ROOF:
                takeoff.base_quantity += geometry.roof_area(element, self.tables)
                takeoff.method = "Roof area calculation from drawings (with pitch factor)"
            else:
                takeoff.base_quantity += element.dimensions.area or 0.0
                takeoff.method = "Area calculation from drawings"
        return takeoff

    def _volume(self, item: ScopeItem, elements: list[BuildingElement]) -> _Takeoff:
        if not elements:
            return self._from_scope(item, 0.0)

        takeoff = _Takeoff()
        for element in elements:
            if element.type is ElementType.WALL and _VOLUME_MATERIALS.search(item.description):
                thickness = geometry.extract_thickness(item.description) or self.tables.default_thickness
                takeoff.base_quantity += geometry.wall_area(element, self.tables) * thickness
                takeoff.method = "Wall volume calculation (area × thickness)"
                takeoff.assumptions.append(f"Assumed thickness: {thickness * 1000:g}mm")
            else:
                takeoff.base_quantity += geometry.box_volume(element)
                takeoff.method = "Volume calculation from drawings"
        return takeoff

    def _count(self, item: ScopeItem, elements: list[BuildingElement]) -> _Takeoff:
        if not elements:
            return self._from_scope(item, 1.0)
        return _Takeoff(base_quantity=float(len(elements)), method="Count of elements from drawings")

    def _assembly(self, item: ScopeItem, elements: list[BuildingElement]) -> _Takeoff:
        assumptions = ["Assembly item requires multiple measurement calculations"]
        if not elements:
            takeoff = self._from_scope(
                item, 1.0, "Using scope-specified quantity (complex assembly)",
            )
            takeoff.assumptions = assumptions + takeoff.assumptions
            return takeoff
        return _Takeoff(
            base_quantity=float(len(elements)),
            method="Count of complete assemblies from drawings",
            assumptions=assumptions,
        )
