"""Immutable configuration for the structuring engine.

Vocabularies, heading tables and compiled patterns are bundled in a frozen
``EngineConfig`` so callers can swap in alternate word lists (for example a
localized skill vocabulary) without touching the extractors. ``DEFAULT_CONFIG``
is built once at import and only ever read afterwards.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Pattern, Tuple


# ---- Tuning constants ----

MAX_INPUT_CHARS = 100_000
SUMMARY_MAX_CHARS = 650
SUMMARY_FALLBACK_LINES = 6

HIGHLIGHT_MIN_CHARS = 8
HIGHLIGHT_MAX_CHARS = 260
MAX_PENDING_HIGHLIGHTS = 8
MAX_HIGHLIGHTS = 4

DESCRIPTION_MIN_CHARS = 18
DESCRIPTION_MAX_CHARS = 220
MAX_PENDING_DESCRIPTIONS = 4
MAX_DESCRIPTIONS = 4

MAX_HEADING_WORDS = 5
FALLBACK_THRESHOLD = 2
MAX_SYNTHESIZED_ENTRIES = 3
SYNTHESIZED_TITLE_CHARS = 80

MAX_SKILLS = 40
MAX_EXPERIENCES = 6
MAX_EDUCATION = 4

FIELD_CAPS = MappingProxyType({
    "name": 120,
    "email": 254,
    "phone": 40,
    "location": 200,
    "link": 300,
    "summary": SUMMARY_MAX_CHARS,
    "skill": 80,
    "title": 160,
    "company": 160,
    "start": 40,
    "end": 40,
    "highlight": 850,
    "school": 200,
    "degree": 200,
    "gpa": 20,
    "date": 60,
    "description": 850,
})


# ---- Default vocabularies ----

# Plain substring matching: entries that occur inside everyday words
# ("scala" in scalable, "git" in digital, "java" in javascript) are left out.
SKILL_KEYWORDS = (
    "javascript", "typescript", "react", "next.js", "node", "nestjs", "python",
    "sql", "postgres", "docker", "aws",
    "kotlin", "golang", "php", "c++", "c#",
    "html", "css", "vue", "svelte", "redux", "graphql",
    "django", "flask", "fastapi", "laravel",
    "mysql", "mongodb", "redis", "elasticsearch", "kafka", "rabbitmq",
    "gcp", "azure", "kubernetes", "terraform", "ansible", "jenkins", "linux",
    "pandas", "numpy", "pytorch", "tensorflow", "scikit-learn",
    "airflow", "tableau", "figma",
)

SECTION_TITLE_KEYWORDS = {
    "summary": ("SUMMARY", "PROFILE"),
    "skills": ("SKILLS", "TECHNICAL SKILLS", "PROGRAMMING LANGUAGE", "PROGRAMMING LANGUAGES"),
    "work": ("WORK EXPERIENCE", "EXPERIENCE", "PROFESSIONAL EXPERIENCE", "EMPLOYMENT HISTORY"),
    "projects": ("PROJECTS", "PROJECT EXPERIENCE", "PROJECTS EXPERIENCES"),
    "education": ("EDUCATION",),
    "references": ("REFERENCES",),
}

# Substring hints for short all-caps headings, checked in order.
SECTION_NAME_HINTS = (
    ("EXPERIENCE", "work"),
    ("SKILL", "skills"),
    ("PROJECT", "projects"),
    ("EDUCATION", "education"),
    ("REFERENCE", "references"),
    ("SUMMARY", "summary"),
    ("PROFILE", "summary"),
)

SECTION_NAMES = ("profile", "summary", "skills", "work", "projects", "education", "references")

ROLE_HINTS = (
    "engineer", "developer", "manager", "assistant", "analyst", "intern",
    "consultant", "lead", "architect", "designer", "coordinator", "specialist",
    "director", "scientist", "administrator", "programmer", "officer", "technician",
)

SCHOOL_HINTS = ("university", "college", "institute", "school", "education")
SCHOOL_EXCLUDES = ("work", "experience", "project")
DEGREE_HINTS = (
    "bachelor", "master", "phd", "doctorate", "diploma", "degree", "mba", "bsc",
    "msc", "program", "software", "computer", "it",
)
LABEL_WORDS = ("Address", "Phone Number", "Email", "GitHub")


# ---- Shared patterns ----

_DATE_TOKEN = r"[A-Za-z]{3,9}\s+\d{4}|\d{4}"
DATE_RANGE_RE = re.compile(
    rf"\b({_DATE_TOKEN})\s*[-–—]\s*(Current|Present|{_DATE_TOKEN})\b",
    re.IGNORECASE,
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
SECTION_HEADING_RE = re.compile(
    r"^(?:SUMMARY|WORK EXPERIENCE|PROJECTS EXPERIENCES|EDUCATION|REFERENCES|PROGRAMMING LANGUAGE|SKILLS?)$",
    re.IGNORECASE,
)
CAPS_HEADING_RE = re.compile(r"^[A-Z][A-Z\s/&]{5,}$")
ADHOC_HEADING_RE = re.compile(r"^[A-Z][A-Z\s/&]{2,40}$")
CAPS_BLOCK_RE = re.compile(r"^[A-Z\s]{4,}$")
GPA_RE = re.compile(r"\bGPA\b[:\s]*(\d+(?:\.\d+)?)", re.IGNORECASE)


def _word_pattern(words: Iterable[str]) -> Pattern[str]:
    words = tuple(words)
    if not words:
        return re.compile(r"(?!x)x")
    alternation = "|".join(re.escape(word) for word in words)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def _unique_lower(values: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    out = []
    for value in values:
        token = (value or "").strip().lower()
        if not token or token in seen:
            continue
        seen.add(token)
        out.append(token)
    return tuple(out)


@dataclass(frozen=True)
class EngineConfig:
    """Read-only tables consumed by every extractor."""

    skill_keywords: Tuple[str, ...] = SKILL_KEYWORDS
    role_hints: Tuple[str, ...] = ROLE_HINTS
    section_keywords: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(SECTION_TITLE_KEYWORDS))
    )
    school_hints: Tuple[str, ...] = SCHOOL_HINTS
    school_excludes: Tuple[str, ...] = SCHOOL_EXCLUDES
    degree_hints: Tuple[str, ...] = DEGREE_HINTS
    label_words: Tuple[str, ...] = LABEL_WORDS
    max_input_chars: int = MAX_INPUT_CHARS
    role_hint_re: Pattern[str] = field(init=False, repr=False, compare=False)
    school_re: Pattern[str] = field(init=False, repr=False, compare=False)
    school_exclude_re: Pattern[str] = field(init=False, repr=False, compare=False)
    degree_re: Pattern[str] = field(init=False, repr=False, compare=False)
    label_re: Pattern[str] = field(init=False, repr=False, compare=False)
    heading_lookup: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # frozen: derived fields are set through object.__setattr__
        object.__setattr__(self, "skill_keywords", _unique_lower(self.skill_keywords))
        object.__setattr__(self, "role_hints", _unique_lower(self.role_hints))
        for name in ("school_hints", "school_excludes", "degree_hints", "label_words"):
            object.__setattr__(self, name, _unique_lower(getattr(self, name)))
        object.__setattr__(self, "role_hint_re", _word_pattern(self.role_hints))
        object.__setattr__(self, "school_re", _word_pattern(self.school_hints))
        object.__setattr__(self, "school_exclude_re", _word_pattern(self.school_excludes))
        object.__setattr__(self, "degree_re", _word_pattern(self.degree_hints))
        object.__setattr__(self, "label_re", _word_pattern(self.label_words))
        lookup = {}
        for section, keywords in self.section_keywords.items():
            for keyword in keywords:
                lookup.setdefault(keyword.upper(), section)
        object.__setattr__(self, "heading_lookup", MappingProxyType(lookup))

    def with_skills(self, skills: Iterable[str]) -> "EngineConfig":
        return replace(self, skill_keywords=tuple(skills))


DEFAULT_CONFIG = EngineConfig()


# ---- Environment loading ----

_ENV_LOADED = False


def _load_local_env(env_path: Optional[Path] = None) -> None:
    global _ENV_LOADED
    if _ENV_LOADED and env_path is None:
        return
    path = env_path or Path(__file__).resolve().parent.parent / ".env"
    if path.exists():
        for raw_line in path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                value = value[1:-1]
            os.environ.setdefault(key.strip(), value)
    _ENV_LOADED = True


def _read_skill_file(path: Path) -> Tuple[str, ...]:
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(content)
        if not isinstance(data, list):
            raise ValueError(f"Skill vocabulary must be a JSON list: {path}")
        return tuple(str(item) for item in data)
    return tuple(line for line in content.splitlines() if line.strip())


def load_config(env_path: Optional[Path] = None) -> EngineConfig:
    """Build an ``EngineConfig`` from ``.env`` and process environment.

    ``RESUME_MAX_INPUT_CHARS`` overrides the input ceiling and
    ``RESUME_SKILLS_FILE`` points at a JSON list or newline-separated
    vocabulary replacing the default skills.
    """
    _load_local_env(env_path)
    config = DEFAULT_CONFIG

    raw_limit = os.getenv("RESUME_MAX_INPUT_CHARS", "").strip()
    if raw_limit:
        limit = int(raw_limit)
        if limit <= 0:
            raise ValueError("RESUME_MAX_INPUT_CHARS must be positive")
        config = replace(config, max_input_chars=limit)

    skills_file = os.getenv("RESUME_SKILLS_FILE", "").strip()
    if skills_file:
        config = config.with_skills(_read_skill_file(Path(skills_file)))
    return config


__all__ = ["EngineConfig", "DEFAULT_CONFIG", "load_config"]
