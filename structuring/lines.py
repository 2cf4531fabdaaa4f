# lines.py
# --- Raw text clean-up, line splitting and wrapped-line joining ---

import re
from typing import Any, List, Sequence

from structuring.debug import _debug
from structuring.settings import MAX_INPUT_CHARS

_CID_RE = re.compile(r"\(cid:\d+\)")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WS_RE = re.compile(r"\s+")
_JOINABLE_TAIL_RE = re.compile(r"[A-Za-z0-9,/:)\]]$")
_CONTINUATION_HEAD_RE = re.compile(r"^[a-z(]")
BULLET_CHARS = "-•*·●▪‣◦"
_BULLET_PREFIX_RE = re.compile(rf"^[{re.escape(BULLET_CHARS)}]+\s*")


def sanitize_text(text: Any, max_chars: int = MAX_INPUT_CHARS) -> str:
    """Coerce to str, drop PDF glyph artifacts and control chars, enforce the size ceiling."""
    if text is None:
        return ""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="ignore")
    elif not isinstance(text, str):
        text = str(text)
    if len(text) > max_chars:
        _debug("sanitize", f"truncated input from {len(text)} to {max_chars} chars")
        text = text[:max_chars]
    text = _CID_RE.sub("", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _CONTROL_RE.sub(" ", text)


def collapse(value: str) -> str:
    return _WS_RE.sub(" ", value).strip()


def normalize_lines(text: str) -> List[str]:
    lines = [collapse(raw) for raw in text.split("\n")]
    lines = [ln for ln in lines if ln]
    _debug("lines", f"kept {len(lines)} lines")
    return lines


def merge_wrapped_lines(lines: Sequence[str]) -> List[str]:
    """Join visually wrapped continuation lines back onto the line they continue."""
    merged: List[str] = []
    for raw in lines:
        line = collapse(raw)
        if not line:
            continue
        if merged and _JOINABLE_TAIL_RE.search(merged[-1]) and _CONTINUATION_HEAD_RE.match(line):
            merged[-1] = collapse(f"{merged[-1]} {line}")
            continue
        merged.append(line)
    return merged


def strip_bullet(line: str) -> str:
    return _BULLET_PREFIX_RE.sub("", line).strip()


def unique(values: Sequence[str]) -> List[str]:
    seen = set()
    out = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out
