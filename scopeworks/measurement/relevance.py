"""Which drawing elements bear on a scope item."""

from __future__ import annotations

from typing import Iterable

from scopeworks.models.element import BuildingElement
from scopeworks.models.scope import ScopeItem

# Materials whose items are linked to elements located on structural drawings.
STRUCTURAL_MATERIALS = ("timber", "concrete", "steel")


def is_relevant(item: ScopeItem, element: BuildingElement, link_structural: bool = False) -> bool:
    """True when *element* should be measured for *item*.

    An element is relevant when its type name appears in the description,
    or its location contains the item's extracted location.  With
    *link_structural*, timber, concrete and steel items also take every
    element whose location mentions "structural".
    """
    description = item.description.lower()
    element_type = element.type.value
    location = element.location.lower()

    if element_type in description:
        return True
    if item.location and item.location.lower() in location:
        return True
    if link_structural and "structural" in location:
        return any(material in description for material in STRUCTURAL_MATERIALS)
    return False


def relevant_elements(
    item: ScopeItem,
    elements: Iterable[BuildingElement],
    link_structural: bool = False,
) -> list[BuildingElement]:
    """Filter *elements* to those relevant to *item*, keeping their order."""
    return [e for e in elements if is_relevant(item, e, link_structural)]
