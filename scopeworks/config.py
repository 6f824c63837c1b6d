"""Global configuration: pipeline thresholds, jurisdiction, logging.

Settings are merged in this order (later wins)::

    defaults -> JSON file -> SCOPEWORKS_<FIELD> environment variables
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "SCOPEWORKS_"

# Jurisdiction used for regulatory notes when none is configured.
DEFAULT_JURISDICTION = "AU-NSW"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class EstimatorSettings(BaseModel):
    """Thresholds that drive the continue/stop logic of the pipeline."""

    model_config = ConfigDict(frozen=True)

    question_confidence_threshold: float = 85
    """Items scoring below this get clarification questions."""

    high_confidence_threshold: float = 85
    medium_confidence_threshold: float = 70
    low_confidence_threshold: float = 40
    """Below this an item needs manual review."""

    max_high_priority_questions: int = 3
    min_average_confidence: float = 70
    max_review_fraction: float = 0.3

    ambiguity_penalty: float = 5
    """Points taken off the overall scope confidence per ambiguity."""

    min_section_length: int = 10
    """Sentence fragments of this length or shorter are discarded when splitting."""

    jurisdiction: str = DEFAULT_JURISDICTION
    log_level: str = "INFO"


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> EstimatorSettings:
    """Load :class:`EstimatorSettings` from an optional JSON file and the environment.

    Parameters
    ----------
    path:
        Optional JSON file with a flat object of setting names to values.
        A missing or unreadable file is ignored.  A value that fails
        validation, from either source, is dropped with a warning.
    environ:
        Mapping to read ``SCOPEWORKS_*`` overrides from.  Defaults to
        :data:`os.environ`.
    """
    values: dict[str, Any] = {}

    if path is not None:
        cfg_path = Path(path)
        if cfg_path.is_file():
            try:
                raw = json.loads(cfg_path.read_text(encoding="utf-8"))
                if isinstance(raw, dict):
                    values.update(raw)
            except (json.JSONDecodeError, OSError):
                logger.warning("Could not read settings file %s", cfg_path)

    env = os.environ if environ is None else environ
    for name in EstimatorSettings.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in env:
            values[name] = env[key]

    known = {k: v for k, v in values.items() if k in EstimatorSettings.model_fields}
    try:
        return EstimatorSettings(**known)
    except ValidationError as exc:
        invalid = {err["loc"][0] for err in exc.errors() if err["loc"]}
        for name in sorted(invalid):
            logger.warning("Ignoring invalid setting %s=%r", name, known[name])
        return EstimatorSettings(**{k: v for k, v in known.items() if k not in invalid})


def configure_logging(level: str | int | None = None) -> None:
    """Attach a basic stream handler to the ``scopeworks`` logger.

    The library never installs handlers on import; scripts call this once.
    """
    if level is None:
        level = load_settings().log_level
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger("scopeworks")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
