# education.py
# --- Education extraction: school/degree/date/GPA state machine ---

import re
from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, List, Optional, Sequence, Tuple

from structuring.debug import _debug
from structuring.lines import merge_wrapped_lines, strip_bullet
from structuring.schema import Education
from structuring.sections import is_section_heading
from structuring.settings import (
    DATE_RANGE_RE,
    DEFAULT_CONFIG,
    DESCRIPTION_MAX_CHARS,
    DESCRIPTION_MIN_CHARS,
    GPA_RE,
    MAX_DESCRIPTIONS,
    MAX_PENDING_DESCRIPTIONS,
    YEAR_RE,
    EngineConfig,
)

_TRAILING_PAREN_RE = re.compile(r"\s*\([^()]*\)\s*$")


@dataclass(frozen=True)
class EducationState:
    open: Optional[Education] = None
    pending: Tuple[str, ...] = ()
    finished: Tuple[Education, ...] = ()


def extract_year_range(line: str) -> Optional[str]:
    m = DATE_RANGE_RE.search(line)
    if m:
        return f"{m.group(1)} - {m.group(2)}"
    years = YEAR_RE.findall(line)
    if len(years) >= 2:
        return f"{years[0]} - {years[1]}"
    return None


def extract_gpa(line: str) -> Optional[str]:
    m = GPA_RE.search(line)
    return m.group(1) if m else None


def is_school_line(line: str, config: EngineConfig = DEFAULT_CONFIG) -> bool:
    return bool(config.school_re.search(line)) and not config.school_exclude_re.search(line)


def is_degree_line(line: str, config: EngineConfig = DEFAULT_CONFIG) -> bool:
    return bool(config.degree_re.search(line))


def flush(state: EducationState) -> EducationState:
    if state.open is None:
        return state
    entry = state.open
    if state.pending:
        merged = [strip_bullet(line) for line in merge_wrapped_lines(state.pending)]
        entry = replace(entry, descriptions=tuple(line for line in merged if line)[:MAX_DESCRIPTIONS])
    return EducationState(open=None, pending=(), finished=state.finished + (entry,))


def step(state: EducationState, line: str, config: EngineConfig = DEFAULT_CONFIG) -> EducationState:
    if is_section_heading(line):
        return flush(state)

    date = extract_year_range(line)
    gpa = extract_gpa(line)

    if is_school_line(line, config):
        school = _TRAILING_PAREN_RE.sub("", line).strip() or line
        return replace(flush(state), open=Education(school=school, date=date, gpa=gpa))

    degree_line = is_degree_line(line, config)
    entry = state.open
    if entry is None:
        if degree_line:
            return replace(state, open=Education(degree=line, date=date, gpa=gpa))
        return state

    if not entry.degree and degree_line:
        return replace(state, open=replace(entry, degree=line, date=entry.date or date, gpa=entry.gpa or gpa))
    if date and not entry.date:
        return replace(state, open=replace(entry, date=date, gpa=entry.gpa or gpa))
    if gpa and not entry.gpa:
        return replace(state, open=replace(entry, gpa=gpa))

    if DESCRIPTION_MIN_CHARS <= len(line) <= DESCRIPTION_MAX_CHARS and len(state.pending) < MAX_PENDING_DESCRIPTIONS:
        return replace(state, pending=state.pending + (line,))
    return state


def dedupe_education(entries: Iterable[Education]) -> List[Education]:
    seen = set()
    out: List[Education] = []
    for entry in entries:
        sig = entry.key()
        if sig in seen:
            continue
        seen.add(sig)
        out.append(entry)
    return out


def extract_education(lines: Sequence[str], config: EngineConfig = DEFAULT_CONFIG) -> List[Education]:
    final = flush(reduce(lambda state, line: step(state, line, config), lines, EducationState()))
    items = dedupe_education(final.finished)
    _debug("extract_education", f"found {len(items)}")
    return items
