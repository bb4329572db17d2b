"""marktree: bookmark tree manager with stable handles, permission gating and key-value persistence."""

from pathlib import Path


def _read_version() -> str:
    p = Path(__file__).resolve().parents[1] / "VERSION"
    try:
        return p.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _read_version()
