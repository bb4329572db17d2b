from __future__ import annotations

from typing import Any, Optional

from .errors import TypeMismatchError
from .model import Bookmark, BookmarkFolder, BookmarkItem

_TRUE = ("1", "true", "yes", "y", "on")
_FALSE = ("", "0", "false", "no", "n", "off")


def coerce_bookmark(value: Any, *, optional: bool = False) -> Optional[Bookmark]:
    """Accept a folder or item handle. Whether a folder is required is the
    caller's check, since that needs the live tree."""
    if value is None and optional:
        return None
    if isinstance(value, (BookmarkFolder, BookmarkItem)):
        return value
    raise TypeMismatchError(f"expected BookmarkFolder or BookmarkItem, got {type(value).__name__}")


def coerce_bool(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE:
            return True
        if v in _FALSE:
            return False
    raise TypeMismatchError(f"expected a boolean, got {value!r}")
