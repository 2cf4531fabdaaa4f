"""Rule-based structuring of extracted résumé text."""

from structuring.parser import parse_resume_text, set_debug
from structuring.schema import Basics, Education, Experience, ResumeParsed
from structuring.settings import DEFAULT_CONFIG, EngineConfig, load_config

__all__ = [
    "parse_resume_text",
    "set_debug",
    "ResumeParsed",
    "Basics",
    "Experience",
    "Education",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "load_config",
]
