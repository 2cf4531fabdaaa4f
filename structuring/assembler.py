"""Merge extractor outputs into a capped, deduplicated ``ResumeParsed``.

Everything here is pure and total: any mix of empty or partial extractor
results (or an arbitrary dict coming from a model structurer) produces a
well-formed record with every size cap enforced.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from structuring.debug import _debug
from structuring.education import dedupe_education
from structuring.experience import dedupe_experiences, extract_experiences, synthesize_experiences
from structuring.lines import collapse
from structuring.schema import Basics, Education, Experience, ResumeParsed, _coerce_text
from structuring.settings import (
    DEFAULT_CONFIG,
    FALLBACK_THRESHOLD,
    FIELD_CAPS,
    MAX_DESCRIPTIONS,
    MAX_EDUCATION,
    MAX_EXPERIENCES,
    MAX_HIGHLIGHTS,
    MAX_SKILLS,
    EngineConfig,
)

_BASICS_FIELDS = ("name", "email", "phone", "location", "link", "summary")


def clean_text(value: Any, cap: int) -> Optional[str]:
    text = collapse(_coerce_text(value))
    return text[:cap].strip() or None


def _clean_list(values: Any, cap: int, limit: int) -> tuple:
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, (list, tuple)):
        values = []
    out: List[str] = []
    for value in values:
        text = clean_text(value, cap)
        if text and text not in out:
            out.append(text)
        if len(out) >= limit:
            break
    return tuple(out)


def collect_experiences(
    sections: Mapping[str, Sequence[str]],
    lines: Sequence[str],
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[Experience]:
    """Primary pass over the work-priority buckets, widened to all lines when under-productive.

    Each bucket is folded on its own: the heading that separated two buckets
    was consumed by the classifier, so a bucket boundary closes the open entry.
    """
    if sections.get("work"):
        segments = [sections.get("work", []), sections.get("profile", []) + sections.get("summary", [])]
    else:
        segments = [sections.get("profile", []) + sections.get("summary", []), sections.get("skills", [])]

    primary: List[Experience] = []
    for segment in segments:
        primary.extend(extract_experiences(segment, config))
    primary = dedupe_experiences(primary)

    merged = list(primary)
    if len(primary) < FALLBACK_THRESHOLD:
        _debug("collect_experiences", f"primary pass found {len(primary)}; scanning all lines")
        merged.extend(extract_experiences(lines, config))
    merged = dedupe_experiences(merged)

    if not merged:
        merged = synthesize_experiences(lines, config)
    return merged[:MAX_EXPERIENCES]


def _clean_experience(entry: Experience) -> Experience:
    highlights = _clean_list(entry.highlights, FIELD_CAPS["highlight"], MAX_HIGHLIGHTS)
    summary = clean_text(entry.summary, FIELD_CAPS["highlight"])
    return Experience(
        title=clean_text(entry.title, FIELD_CAPS["title"]),
        company=clean_text(entry.company, FIELD_CAPS["company"]),
        start=clean_text(entry.start, FIELD_CAPS["start"]),
        end=clean_text(entry.end, FIELD_CAPS["end"]),
        summary=summary or (highlights[0] if highlights else None),
        highlights=highlights,
    )


def _clean_education(entry: Education) -> Education:
    return Education(
        school=clean_text(entry.school, FIELD_CAPS["school"]),
        degree=clean_text(entry.degree, FIELD_CAPS["degree"]),
        gpa=clean_text(entry.gpa, FIELD_CAPS["gpa"]),
        date=clean_text(entry.date, FIELD_CAPS["date"]),
        descriptions=_clean_list(entry.descriptions, FIELD_CAPS["description"], MAX_DESCRIPTIONS),
    )


def assemble(
    basics: Mapping[str, Any],
    skills: Iterable[str],
    experiences: Iterable[Experience],
    education: Iterable[Education],
) -> ResumeParsed:
    cleaned_basics = Basics(**{key: clean_text(basics.get(key), FIELD_CAPS[key]) for key in _BASICS_FIELDS})

    exp = [_clean_experience(entry) for entry in experiences]
    exp = dedupe_experiences(entry for entry in exp if not entry.is_empty())

    edu = [_clean_education(entry) for entry in education]
    edu = dedupe_education(entry for entry in edu if not entry.is_empty())

    return ResumeParsed(
        basics=cleaned_basics,
        skills=_clean_list(skills, FIELD_CAPS["skill"], MAX_SKILLS),
        experiences=tuple(exp[:MAX_EXPERIENCES]),
        education=tuple(edu[:MAX_EDUCATION]),
    )


def _as_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_sequence(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_texts(value: Any) -> tuple:
    if isinstance(value, str):
        return (value,)
    return tuple(_as_sequence(value))


def coerce_parsed(data: Any) -> ResumeParsed:
    """Squeeze an arbitrary (possibly malformed) dict into a capped ``ResumeParsed``."""
    payload = _as_mapping(data)
    experiences = []
    for raw in _as_sequence(payload.get("experiences")):
        item = _as_mapping(raw)
        experiences.append(
            Experience(
                title=item.get("title"),
                company=item.get("company"),
                start=item.get("start"),
                end=item.get("end"),
                summary=item.get("summary"),
                highlights=_as_texts(item.get("highlights")),
            )
        )
    education = []
    for raw in _as_sequence(payload.get("education")):
        item = _as_mapping(raw)
        education.append(
            Education(
                school=item.get("school"),
                degree=item.get("degree"),
                gpa=item.get("gpa"),
                date=item.get("date"),
                descriptions=_as_texts(item.get("descriptions")),
            )
        )
    return assemble(
        _as_mapping(payload.get("basics")),
        _as_sequence(payload.get("skills")),
        experiences,
        education,
    )
