# parser.py
# --- Structured résumé record from raw extracted text (rule-based, deterministic) ---

from typing import Any, Optional

from structuring.assembler import assemble, collect_experiences
from structuring.debug import _debug, set_debug
from structuring.education import extract_education
from structuring.fields import (
    extract_email,
    extract_link,
    extract_location,
    extract_name,
    extract_phone,
    extract_summary,
)
from structuring.lines import normalize_lines, sanitize_text
from structuring.schema import ResumeParsed
from structuring.sections import split_sections
from structuring.skills import extract_skills
from structuring.settings import DEFAULT_CONFIG, EngineConfig


def parse_resume_text(raw_text: Any, config: Optional[EngineConfig] = None) -> ResumeParsed:
    """Structure linear résumé text into a ``ResumeParsed``.

    Never raises: empty, truncated or non-résumé text yields a sparsely
    populated record. Every call works on fresh local state, so concurrent
    callers need no coordination.
    """
    config = config or DEFAULT_CONFIG
    _debug("parse", "start")
    text = sanitize_text(raw_text, config.max_input_chars)
    lines = normalize_lines(text)
    sections = split_sections(lines, config)

    profile_and_summary = sections["profile"] + sections["summary"]
    basics = {
        "name": extract_name(profile_and_summary or lines),
        "email": extract_email(text),
        "phone": extract_phone(text),
        "location": extract_location(lines),
        "link": extract_link(text),
        "summary": extract_summary(sections["summary"], profile_and_summary),
    }

    skills = extract_skills(text, config)
    experiences = collect_experiences(sections, lines, config)
    education = extract_education(sections["education"] or lines, config)

    resume = assemble(basics, skills, experiences, education)
    _debug(
        "parse",
        f"complete: skills={len(resume.skills)}, experiences={len(resume.experiences)}, education={len(resume.education)}",
    )
    return resume


__all__ = ["parse_resume_text", "set_debug"]
