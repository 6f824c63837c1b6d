"""Rule-based parsing of free-text scope of work into scope items."""

from scopeworks.parsing.parser import ScopeParser
from scopeworks.parsing.resolution import ItemConfidenceWeights
from scopeworks.parsing.sections import normalize_text, split_sections

__all__ = [
    "ItemConfidenceWeights",
    "ScopeParser",
    "normalize_text",
    "split_sections",
]
