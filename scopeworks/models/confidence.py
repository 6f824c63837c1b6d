"""ConfidenceLevel — the 0–100 trust score attached to every derived value.

A ConfidenceLevel is never patched in place.  When new evidence arrives a
fresh one is computed with :func:`confidence_level`.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class ConfidenceIndicator(str, Enum):
    """Coarse four-bucket indicator derived from the score."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class ConfidenceThreshold(str, Enum):
    """Review threshold label used by the pipeline summaries."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    MANUAL = "manual"


class ConfidenceLevel(BaseModel):
    """Immutable confidence score with its supporting evidence."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(default=0.0, ge=0.0, le=100.0)
    indicator: ConfidenceIndicator = ConfidenceIndicator.UNKNOWN
    threshold: ConfidenceThreshold = ConfidenceThreshold.MANUAL
    requires_review: bool = True
    reasons: tuple[str, ...] = ()
    uncertainty_factors: tuple[str, ...] = ()


def indicator_for(score: float) -> ConfidenceIndicator:
    """Map a score to its bucket: >=90 high, >=70 medium, >0 low, else unknown."""
    if score >= 90:
        return ConfidenceIndicator.HIGH
    if score >= 70:
        return ConfidenceIndicator.MEDIUM
    if score > 0:
        return ConfidenceIndicator.LOW
    return ConfidenceIndicator.UNKNOWN


def threshold_for(score: float) -> ConfidenceThreshold:
    if score >= 85:
        return ConfidenceThreshold.HIGH
    if score >= 70:
        return ConfidenceThreshold.MEDIUM
    if score >= 40:
        return ConfidenceThreshold.LOW
    return ConfidenceThreshold.MANUAL


def clamp_score(score: float) -> float:
    return max(0.0, min(100.0, float(score)))


def confidence_level(
    score: float,
    reasons: Iterable[str] | None = None,
    uncertainty_factors: Iterable[str] | None = None,
) -> ConfidenceLevel:
    """Build a ConfidenceLevel, clamping *score* into [0, 100]."""
    score = clamp_score(score)
    return ConfidenceLevel(
        score=score,
        indicator=indicator_for(score),
        threshold=threshold_for(score),
        requires_review=score < 85,
        reasons=tuple(reasons or ()),
        uncertainty_factors=tuple(uncertainty_factors or ()),
    )
