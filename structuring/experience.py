"""Work-experience extraction.

The extractor is a fold over the candidate lines. ``ExperienceState`` carries
the open entry (if any), the highlight lines collected for it and the entries
already finished; ``step`` is the pure per-line transition:

* a "role — company" header flushes the open entry and opens a new one,
* a date range fills start/end of the open entry once,
* a section heading flushes back to idle,
* any other plausible line becomes a pending highlight of the open entry.

``synthesize_experiences`` is the last-resort pass used when no header line
was recognised anywhere.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, List, Optional, Sequence, Tuple

from structuring.debug import _debug
from structuring.lines import collapse, merge_wrapped_lines, strip_bullet, unique
from structuring.schema import Experience
from structuring.sections import is_section_heading
from structuring.settings import (
    CAPS_BLOCK_RE,
    DATE_RANGE_RE,
    DEFAULT_CONFIG,
    HIGHLIGHT_MAX_CHARS,
    HIGHLIGHT_MIN_CHARS,
    MAX_HIGHLIGHTS,
    MAX_PENDING_HIGHLIGHTS,
    MAX_SYNTHESIZED_ENTRIES,
    SYNTHESIZED_TITLE_CHARS,
    YEAR_RE,
    EngineConfig,
)

_SEPARATORS = (("—", 1), ("–", 1), (" - ", 3))
_LEADING_DASHES_RE = re.compile(r"^[-–—\s]+")
_TRAILING_PAREN_RE = re.compile(r"\s*\([^()]*\)\s*$")


@dataclass(frozen=True)
class ExperienceState:
    open: Optional[Experience] = None
    pending: Tuple[str, ...] = ()
    finished: Tuple[Experience, ...] = ()


def parse_date_range(line: str) -> Optional[Tuple[str, str]]:
    m = DATE_RANGE_RE.search(line)
    if not m:
        return None
    return m.group(1).strip(), m.group(2).strip()


def _find_separator(line: str) -> Tuple[int, int]:
    for sep, width in _SEPARATORS:
        idx = line.find(sep)
        if idx >= 0:
            return idx, width
    return -1, 0


def split_role_and_company(line: str, config: EngineConfig = DEFAULT_CONFIG) -> Optional[Experience]:
    """Recognise "Title — Company" header lines; None when the line is not one."""
    idx, width = _find_separator(line)
    if idx < 1:
        return None
    # a dash inside "Jan 2020 - Dec 2021" is not a title separator
    if any(m.start() <= idx < m.end() for m in DATE_RANGE_RE.finditer(line)):
        return None

    left = line[:idx].strip()
    right = _LEADING_DASHES_RE.sub("", line[idx + width:]).strip()
    if not left or not right:
        return None
    if not config.role_hint_re.search(left):
        return None

    start = end = None
    dates = DATE_RANGE_RE.search(right)
    if dates:
        start, end = dates.group(1).strip(), dates.group(2).strip()
        right = collapse(f"{right[:dates.start()]} {right[dates.end():]}").strip(" ,|-–—")

    company = _TRAILING_PAREN_RE.sub("", right).strip() or right
    return Experience(title=left, company=company or None, start=start, end=end)


def _is_highlight_candidate(line: str, config: EngineConfig) -> bool:
    if len(line) < HIGHLIGHT_MIN_CHARS or len(line) > HIGHLIGHT_MAX_CHARS:
        return False
    if CAPS_BLOCK_RE.match(line):
        return False
    if config.label_re.search(line):
        return False
    return True


def _finalize_highlights(pending: Sequence[str]) -> Tuple[str, ...]:
    merged = [strip_bullet(line) for line in merge_wrapped_lines(pending)]
    return tuple(unique([line for line in merged if line])[:MAX_HIGHLIGHTS])


def flush(state: ExperienceState) -> ExperienceState:
    if state.open is None:
        return state
    entry = state.open
    if state.pending:
        highlights = _finalize_highlights(state.pending)
        entry = replace(entry, highlights=highlights, summary=highlights[0] if highlights else None)
    return ExperienceState(open=None, pending=(), finished=state.finished + (entry,))


def step(state: ExperienceState, line: str, config: EngineConfig = DEFAULT_CONFIG) -> ExperienceState:
    header = split_role_and_company(line, config)
    if header is not None:
        return replace(flush(state), open=header)

    dates = parse_date_range(line)
    if dates and state.open is not None:
        entry = state.open
        opened = replace(entry, start=entry.start or dates[0], end=entry.end or dates[1])
        return replace(state, open=opened)

    if state.open is None:
        return state
    if is_section_heading(line):
        return flush(state)
    if not _is_highlight_candidate(line, config):
        return state
    if len(state.pending) >= MAX_PENDING_HIGHLIGHTS:
        return state
    return replace(state, pending=state.pending + (line,))


def dedupe_experiences(entries: Iterable[Experience]) -> List[Experience]:
    seen = set()
    out: List[Experience] = []
    for entry in entries:
        sig = entry.key()
        if sig in seen:
            continue
        seen.add(sig)
        out.append(entry)
    return out


def extract_experiences(lines: Sequence[str], config: EngineConfig = DEFAULT_CONFIG) -> List[Experience]:
    """Run the header/date/highlight state machine over ``lines``."""
    final = flush(reduce(lambda state, line: step(state, line, config), lines, ExperienceState()))
    entries = dedupe_experiences(final.finished)
    _debug("extract_experiences", f"found {len(entries)} over {len(lines)} lines")
    return entries


def synthesize_experiences(lines: Sequence[str], config: EngineConfig = DEFAULT_CONFIG) -> List[Experience]:
    """Build entries from lines carrying a year or a role word when no header was found."""
    candidates = [ln for ln in lines if YEAR_RE.search(ln) or config.role_hint_re.search(ln)]
    entries: List[Experience] = []
    for ln in candidates[:MAX_SYNTHESIZED_ENTRIES]:
        years = YEAR_RE.findall(ln)
        entries.append(
            Experience(
                title=ln[:SYNTHESIZED_TITLE_CHARS],
                start=years[0] if years else None,
                end=years[1] if len(years) > 1 else None,
                summary=ln,
                highlights=(ln,),
            )
        )
    _debug("synthesize_experiences", f"built {len(entries)}")
    return entries
