"""Immutable records produced by the structuring engine.

``ResumeParsed.to_dict()`` yields the JSON shape handed to persistence:
optional fields that were not detected are omitted rather than stored as
``null``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, tuple):
            value = list(value)
        out[key] = value
    return out


@dataclass(frozen=True)
class Basics:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    link: Optional[str] = None
    summary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(asdict(self))


@dataclass(frozen=True)
class Experience:
    title: Optional[str] = None
    company: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    summary: Optional[str] = None
    highlights: Tuple[str, ...] = ()

    def key(self) -> Tuple[str, ...]:
        return tuple(_coerce_text(v).lower() for v in (self.title, self.company, self.start, self.end))

    def is_empty(self) -> bool:
        return not any((self.title, self.company, self.start, self.end, self.summary, self.highlights))

    def to_dict(self) -> Dict[str, Any]:
        data = _compact(asdict(self))
        if not self.highlights:
            data.pop("highlights", None)
        return data


@dataclass(frozen=True)
class Education:
    school: Optional[str] = None
    degree: Optional[str] = None
    gpa: Optional[str] = None
    date: Optional[str] = None
    descriptions: Tuple[str, ...] = ()

    def key(self) -> Tuple[str, ...]:
        return tuple(_coerce_text(v).lower() for v in (self.school, self.degree, self.date))

    def is_empty(self) -> bool:
        return not any((self.school, self.degree, self.gpa, self.date, self.descriptions))

    def to_dict(self) -> Dict[str, Any]:
        data = _compact(asdict(self))
        if not self.descriptions:
            data.pop("descriptions", None)
        return data


@dataclass(frozen=True)
class ResumeParsed:
    """Structured résumé record: basics, skills, experiences, education."""

    basics: Basics = field(default_factory=Basics)
    skills: Tuple[str, ...] = ()
    experiences: Tuple[Experience, ...] = ()
    education: Tuple[Education, ...] = ()

    @classmethod
    def empty(cls) -> "ResumeParsed":
        return cls()

    def is_empty(self) -> bool:
        return not (self.basics.to_dict() or self.skills or self.experiences or self.education)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "basics": self.basics.to_dict(),
            "skills": list(self.skills),
            "experiences": [exp.to_dict() for exp in self.experiences],
            "education": [edu.to_dict() for edu in self.education],
        }


__all__ = ["Basics", "Experience", "Education", "ResumeParsed"]
