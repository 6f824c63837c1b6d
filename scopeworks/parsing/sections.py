"""Text normalisation and splitting of a scope into per-item sections."""

from __future__ import annotations

import re

from scopeworks.parsing.patterns import ACTION_RULES, QUANTITY_PATTERNS

_MULTI_SPACE = re.compile(r" {2,}")
_LIST_MARKER = re.compile(r"^(?:[-•*]\s*|\d+[.)]\s+)")
_SENTENCE_SPLIT = re.compile(r"(?:[.;]\s+|\n\n|\band then\b|\bplus\b)", re.I)


def normalize_text(text: str) -> str:
    """Unify line endings, turn tabs into spaces and collapse runs of spaces.

    Newlines are kept; list detection depends on them.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")
    return _MULTI_SPACE.sub(" ", text).strip()


def is_list(text: str) -> bool:
    """True when any line starts with a bullet, dash or ``1.`` / ``1)`` marker."""
    return any(_LIST_MARKER.match(line.strip()) for line in text.split("\n"))


def _split_list(text: str) -> list[str]:
    # Non-bulleted lines (typically a header such as "Kitchen renovation
    # including:") are context only and do not become items.
    sections: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        marker = _LIST_MARKER.match(stripped)
        if marker:
            body = stripped[marker.end():].strip()
            if body:
                sections.append(body)
    return sections


def _has_action(fragment: str) -> bool:
    return any(pattern.search(fragment) for _, pattern, _ in ACTION_RULES)


def _has_explicit_quantity(fragment: str) -> bool:
    return any(pattern.search(fragment) for pattern in QUANTITY_PATTERNS)


def merge_continuations(fragments: list[str]) -> list[str]:
    """Fold quantity-only fragments into the fragment before them.

    "Supply and install plywood to kitchen ceiling. Area approximately
    25 sqm." describes one item; the second sentence carries its quantity.
    """
    merged: list[str] = []
    for fragment in fragments:
        if merged and not _has_action(fragment) and _has_explicit_quantity(fragment):
            merged[-1] = f"{merged[-1]}. {fragment}"
        else:
            merged.append(fragment)
    return merged


def split_sections(text: str, min_length: int = 10) -> list[str]:
    """Split normalised scope text into item sections, preserving order.

    Fragments of *min_length* characters or fewer are discarded.  The
    result is never empty for non-empty *text*.
    """
    if not text:
        return []

    if is_list(text):
        sections = _split_list(text)
    else:
        fragments = [s.strip() for s in _SENTENCE_SPLIT.split(text)]
        fragments = merge_continuations([f for f in fragments if f])
        sections = [f for f in fragments if len(f) > min_length]

    return sections or [text]
