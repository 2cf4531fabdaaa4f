# debug.py
# --- Step-by-step trace output shared by the structuring modules ---

from typing import Optional

_DEBUG = False


def set_debug(enabled: bool) -> None:
    """Toggle step-by-step debug output for the structuring engine."""
    global _DEBUG
    _DEBUG = bool(enabled)


def _debug(step: str, detail: Optional[str] = None) -> None:
    """Emit a debug line when debugging is enabled."""
    if not _DEBUG:
        return
    if detail:
        print(f"[parser] {step}: {detail}")
    else:
        print(f"[parser] {step}")
