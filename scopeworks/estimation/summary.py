"""Confidence summary, proceed decision, next steps and duration estimate."""

from __future__ import annotations

import math

from scopeworks.config import EstimatorSettings
from scopeworks.models.confidence import confidence_level
from scopeworks.models.estimate import ConfidenceSummary, QuoteItem
from scopeworks.models.questions import EstimatorQuestion
from scopeworks.models.scope import Priority


def _mean_score(items: list[QuoteItem]) -> float:
    return sum(i.confidence.score for i in items) / len(items)


def confidence_summary(items: list[QuoteItem], settings: EstimatorSettings) -> ConfidenceSummary:
    """Bucket *items* by score.

    The four buckets are disjoint, so their counts always add up to
    ``len(items)``.
    """
    if not items:
        return ConfidenceSummary(overall_confidence=confidence_level(0, ["No items to analyze"]))

    high = medium = low = review = 0
    for item in items:
        score = item.confidence.score
        if score >= settings.high_confidence_threshold:
            high += 1
        elif score >= settings.medium_confidence_threshold:
            medium += 1
        elif score >= settings.low_confidence_threshold:
            low += 1
        else:
            review += 1

    overall = confidence_level(
        _mean_score(items),
        [
            f"{high} high confidence items",
            f"{medium} medium confidence items",
            f"{low} low confidence items",
        ],
        [f"{review} items require review"] if review else None,
    )
    return ConfidenceSummary(
        overall_confidence=overall,
        high_confidence_items=high,
        medium_confidence_items=medium,
        low_confidence_items=low,
        items_requiring_review=review,
    )


def high_priority_count(questions: list[EstimatorQuestion]) -> int:
    return sum(1 for q in questions if q.priority is Priority.HIGH)


def should_proceed(
    items: list[QuoteItem],
    questions: list[EstimatorQuestion],
    settings: EstimatorSettings,
) -> bool:
    """Decide whether the quote is ready to hand to pricing.

    False with no items, with too many high-priority questions, with a low
    mean confidence, or when too large a share of items needs review.
    """
    if not items:
        return False
    if high_priority_count(questions) > settings.max_high_priority_questions:
        return False
    if _mean_score(items) < settings.min_average_confidence:
        return False
    review = sum(1 for i in items if i.confidence.score < settings.low_confidence_threshold)
    if review > len(items) * settings.max_review_fraction:
        return False
    return True


def next_steps(
    items: list[QuoteItem],
    questions: list[EstimatorQuestion],
    proceed: bool,
    settings: EstimatorSettings,
    jurisdiction: str | None = None,
) -> list[str]:
    steps: list[str] = []

    if questions:
        medium = sum(1 for q in questions if q.priority is Priority.MEDIUM)
        steps.append(f"Answer {high_priority_count(questions)} high-priority questions")
        if medium:
            steps.append(f"Review {medium} medium-priority questions")

    low = sum(1 for i in items if i.confidence.score < settings.medium_confidence_threshold)
    if low:
        steps.append(f"Review {low} items with low confidence")

    if proceed:
        steps.append("Price materials using current supplier rates")
        steps.append(f"Apply labor rates for {jurisdiction or settings.jurisdiction} construction")
        steps.append("Add margins and finalize quote")
    else:
        steps.append("Resolve questions and uncertainties before pricing")

    unpriced = sum(1 for i in items if i.unit_price == 0)
    if unpriced:
        steps.append(f"Price {unpriced} items using materials database")

    return steps


def estimated_minutes(item_count: int, question_count: int) -> int:
    """5 minutes, plus 30 seconds per item and 2 minutes per question, rounded up to 5."""
    minutes = 5 + item_count * 0.5 + question_count * 2
    return int(math.ceil(minutes / 5) * 5)


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} minutes"
    hours, rest = divmod(minutes, 60)
    if rest:
        return f"{hours}h {rest}m"
    return f"{hours} hour{'s' if hours > 1 else ''}"


def estimated_duration(item_count: int, question_count: int) -> str:
    return format_duration(estimated_minutes(item_count, question_count))
