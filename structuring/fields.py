# fields.py
# --- Primitive extractors for the basics block ---

import re
from typing import Optional, Sequence

from structuring.debug import _debug
from structuring.lines import collapse, merge_wrapped_lines
from structuring.settings import SUMMARY_FALLBACK_LINES, SUMMARY_MAX_CHARS

# bounded repeats keep the scan linear on long unbroken runs
_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]{1,64}@[A-Z0-9.-]{1,255}\.[A-Z]{2,24}", re.IGNORECASE)
_PHONE_RE = re.compile(r"\+?\d[\d \t\-()]{8,}\d")
_YEAR_SPAN_RE = re.compile(r"^(?:19|20)\d{2}\s*-\s*(?:19|20)\d{2}$")
_MIN_PHONE_DIGITS = 8
_ADDRESS_LABEL_RE = re.compile(r"\baddress\s*:", re.IGNORECASE)
_ADDRESS_PREFIX_RE = re.compile(r".*address\s*:\s*", re.IGNORECASE)
_CONTACT_LABEL_RE = re.compile(r"\bPhone\b|\bEmail\b", re.IGNORECASE)
_LINK_PATTERNS = (
    re.compile(r"https?://[^\s)]+", re.IGNORECASE),
    re.compile(r"\bwww\.[^\s)]+", re.IGNORECASE),
    re.compile(r"\bgithub\.com/[^\s)]+", re.IGNORECASE),
)
_NAME_RE = re.compile(r"[A-Za-z][A-Za-z\s'.-]{1,48}")


def extract_email(text: str) -> Optional[str]:
    m = _EMAIL_RE.search(text)
    email = m.group() if m else None
    _debug("extract_email", email or "no match")
    return email


def extract_phone(text: str) -> Optional[str]:
    for m in _PHONE_RE.finditer(text):
        candidate = collapse(m.group())
        if sum(ch.isdigit() for ch in candidate) < _MIN_PHONE_DIGITS:
            continue
        if _YEAR_SPAN_RE.match(candidate):
            continue
        _debug("extract_phone", candidate)
        return candidate
    _debug("extract_phone", "no match")
    return None


def extract_location(lines: Sequence[str]) -> Optional[str]:
    address_line = next((ln for ln in lines if _ADDRESS_LABEL_RE.search(ln)), None)
    if address_line is None:
        return None
    remainder = _ADDRESS_PREFIX_RE.sub("", address_line, count=1)
    cleaned = _CONTACT_LABEL_RE.split(remainder)[0].strip()
    return cleaned or None


def extract_link(text: str) -> Optional[str]:
    for pattern in _LINK_PATTERNS:
        m = pattern.search(text)
        if not m:
            continue
        link = m.group()
        if link.lower().startswith("http"):
            return link
        return f"https://{link}"
    return None


def extract_name(lines: Sequence[str]) -> Optional[str]:
    for ln in lines:
        if not _NAME_RE.fullmatch(ln):
            continue
        if "resume" in ln.lower() or "@" in ln or any(ch.isdigit() for ch in ln):
            continue
        _debug("extract_name", ln)
        return ln
    _debug("extract_name", "no match")
    return None


def extract_summary(summary_lines: Sequence[str], fallback_lines: Sequence[str]) -> Optional[str]:
    source = list(summary_lines) if summary_lines else list(fallback_lines)[:SUMMARY_FALLBACK_LINES]
    if not source:
        return None
    merged = collapse(" ".join(merge_wrapped_lines(source)))
    return merged[:SUMMARY_MAX_CHARS].strip() or None
