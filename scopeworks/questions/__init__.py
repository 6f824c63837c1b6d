"""Clarification questions for low-confidence scope items."""

from scopeworks.questions.generator import QuestionGenerator
from scopeworks.questions.standards import is_quantity_unusual

__all__ = ["QuestionGenerator", "is_quantity_unusual"]
