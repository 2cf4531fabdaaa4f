# data_loader.py
# --- Résumé file → linear text, the extraction step that feeds the structuring engine ---

import logging
import re
from pathlib import Path
from typing import Union

from docx import Document
import fitz  # PyMuPDF

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt")
_CID_RE = re.compile(r"\(cid:\d+\)")


def _read_pdf(path: Path) -> str:
    pages = []
    with fitz.open(str(path)) as pdf:
        for page in pdf:
            pages.append(page.get_text("text"))
    logger.info("[loader] read %d pdf pages from %s", len(pages), path.name)
    return "\n".join(pages)


def _read_docx(path: Path) -> str:
    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs)


def _read_txt(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")


_READERS = {
    ".pdf": _read_pdf,
    ".docx": _read_docx,
    ".txt": _read_txt,
}


def load_resume_text(file_path: Union[str, Path]) -> str:
    """
    Return the linear text of a résumé file (.pdf, .docx, .txt) with glyph
    placeholders such as ``(cid:12)`` removed.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"No such file: {path}")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported file type {path.suffix!r}. Use PDF, DOCX, or TXT.")

    return _CID_RE.sub("", reader(path)).strip()
