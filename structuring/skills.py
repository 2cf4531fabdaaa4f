# skills.py
# --- Vocabulary-driven skills extraction ---

from typing import List

from structuring.debug import _debug
from structuring.settings import DEFAULT_CONFIG, MAX_SKILLS, EngineConfig


def extract_skills(text: str, config: EngineConfig = DEFAULT_CONFIG) -> List[str]:
    """Substring-match the configured vocabulary, keeping vocabulary order."""
    low_text = text.lower()
    found = [skill for skill in config.skill_keywords if skill in low_text]
    _debug("extract_skills", f"found {len(found)}")
    return found[:MAX_SKILLS]
