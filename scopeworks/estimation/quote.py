"""Unpriced draft quote assembly."""

from __future__ import annotations

import re

from scopeworks.ids import IdGenerator
from scopeworks.models.estimate import ConfidenceSummary, GeneratedQuote, QuoteItem, QuoteSummary

DEFAULT_PROJECT_NAME = "Construction Estimate"
MAX_TITLE_LENGTH = 100

_PROJECT_REFERENCE = re.compile(r"(?:project|job|site)[:\s]+([^\n]+)", re.I)


def extract_project_name(scope_text: str) -> str:
    """Use the first line as the project name when it is short enough.

    Otherwise fall back to a ``project:``/``job:``/``site:`` reference and
    finally to a generic name.
    """
    first_line = scope_text.split("\n", 1)[0].strip()
    if 0 < len(first_line) < MAX_TITLE_LENGTH:
        return first_line

    match = _PROJECT_REFERENCE.search(scope_text)
    if match:
        return match.group(1).strip()
    return DEFAULT_PROJECT_NAME


def build_quote(
    items: list[QuoteItem],
    summary: ConfidenceSummary,
    scope_text: str,
    ids: IdGenerator,
) -> GeneratedQuote:
    return GeneratedQuote(
        id=ids.new_id("quote"),
        project_name=extract_project_name(scope_text),
        items=list(items),
        summary=QuoteSummary(
            total_items=len(items),
            high_confidence=summary.high_confidence_items,
            medium_confidence=summary.medium_confidence_items,
            low_confidence=summary.low_confidence_items,
            needs_review=summary.items_requiring_review,
            ready_for_pricing=summary.high_confidence_items + summary.medium_confidence_items,
        ),
        confidence_summary=summary,
    )
