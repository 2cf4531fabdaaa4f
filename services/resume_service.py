"""Fallback-of-record structuring for uploaded résumé text.

A hosted model may be wired in as ``model_structurer``: any callable that
takes the extracted text and returns a résumé dict (``basics``, ``skills``,
``experiences``, ``education``) or ``None``. The rule-based engine is used
whenever no structurer is configured or the structurer fails, returns
nothing usable, or returns content that coerces to an empty record.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from structuring.assembler import coerce_parsed
from structuring.parser import parse_resume_text
from structuring.schema import ResumeParsed
from structuring.settings import EngineConfig

logger = logging.getLogger(__name__)

ModelStructurer = Callable[[str], Optional[Dict[str, Any]]]

SOURCE_MODEL = "model"
SOURCE_HEURISTIC = "heuristic"


def _try_model(text: str, model_structurer: ModelStructurer) -> Optional[ResumeParsed]:
    try:
        payload = model_structurer(text)
    except Exception as err:
        logger.exception("[resume] model structurer failed; using heuristic parser: %s", err)
        return None
    if not isinstance(payload, dict):
        logger.info("[resume] model structurer returned %s; using heuristic parser", type(payload).__name__)
        return None
    parsed = coerce_parsed(payload)
    if parsed.is_empty():
        logger.info("[resume] model structurer returned an empty record; using heuristic parser")
        return None
    return parsed


def structure_resume(
    text: str,
    model_structurer: Optional[ModelStructurer] = None,
    config: Optional[EngineConfig] = None,
) -> Tuple[ResumeParsed, str]:
    """Return the structured record and which path produced it."""
    if model_structurer is not None:
        parsed = _try_model(text, model_structurer)
        if parsed is not None:
            return parsed, SOURCE_MODEL
    parsed = parse_resume_text(text, config)
    logger.info(
        "[resume] heuristic parse: %d skills, %d experiences, %d education",
        len(parsed.skills),
        len(parsed.experiences),
        len(parsed.education),
    )
    return parsed, SOURCE_HEURISTIC


__all__ = ["structure_resume", "ModelStructurer", "SOURCE_MODEL", "SOURCE_HEURISTIC"]
