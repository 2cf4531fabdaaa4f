# sections.py
# --- Sectionizer: heading detection and per-section line buckets ---

import re
from typing import Dict, List, Optional, Sequence

from structuring.debug import _debug
from structuring.settings import (
    ADHOC_HEADING_RE,
    CAPS_HEADING_RE,
    DEFAULT_CONFIG,
    MAX_HEADING_WORDS,
    SECTION_HEADING_RE,
    SECTION_NAME_HINTS,
    SECTION_NAMES,
    EngineConfig,
)

_NON_LETTERS_RE = re.compile(r"[^A-Za-z\s]")
_DIGIT_RE = re.compile(r"\d")


def normalize_heading(line: str) -> str:
    text = _NON_LETTERS_RE.sub(" ", line)
    return re.sub(r"\s+", " ", text).strip().upper()


def detect_section(line: str, config: EngineConfig = DEFAULT_CONFIG) -> Optional[str]:
    """Return the section a heading line opens, or None for ordinary lines.

    Lines with digits are never headings, so "Experience 2020" stays content.
    """
    if _DIGIT_RE.search(line):
        return None
    normalized = normalize_heading(line)
    if not normalized:
        return None
    section = config.heading_lookup.get(normalized)
    if section:
        return section

    stripped = line.strip()
    if not ADHOC_HEADING_RE.match(stripped) or len(stripped.split()) > MAX_HEADING_WORDS:
        return None
    for hint, name in SECTION_NAME_HINTS:
        if hint in normalized:
            return name
    return None


def is_section_heading(line: str) -> bool:
    """Looser test used by the entry state machines to close an open entry."""
    return bool(SECTION_HEADING_RE.match(line) or CAPS_HEADING_RE.match(line))


def split_sections(lines: Sequence[str], config: EngineConfig = DEFAULT_CONFIG) -> Dict[str, List[str]]:
    sections: Dict[str, List[str]] = {name: [] for name in SECTION_NAMES}
    current = "profile"
    for ln in lines:
        section = detect_section(ln, config)
        if section:
            current = section
            continue
        sections.setdefault(current, []).append(ln)
    _debug(
        "split_sections",
        ", ".join(f"{name}={len(bucket)}" for name, bucket in sections.items() if bucket) or "empty",
    )
    return sections
