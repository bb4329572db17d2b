from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import StorageError
from .log import get_logger
from .model import BookmarkFolder, BookmarkItem, InternalNode, StorageNode
from .store import BlobStore

log = get_logger(__name__)

DEFAULT_KEY = "tizen1-bookmark"

_FOREST = TypeAdapter(List[StorageNode])


class Serializer:
    """Moves the whole bookmark forest in and out of a blob store.

    Writes always replace the full value under ``key``; there is no
    per-node update.
    """

    def __init__(self, store: BlobStore, key: str = DEFAULT_KEY):
        self.store = store
        self.key = key

    def persist(self, roots: Sequence[InternalNode]) -> List[Dict[str, Any]]:
        data = dump_forest(roots)
        self.store.set(self.key, data)
        log.debug("Persisted %d top-level bookmarks under %r.", len(data), self.key)
        return data

    def load(self) -> List[InternalNode]:
        raw = self.store.get(self.key)
        if raw is None:
            log.debug("No stored bookmarks under %r; starting empty.", self.key)
            return []
        try:
            forest = _FOREST.validate_python(raw)
        except PydanticValidationError as e:
            raise StorageError(f"stored bookmarks under {self.key!r} are malformed: {e}") from e
        roots = [build_internal(s, None) for s in forest]
        log.debug("Loaded %d top-level bookmarks from %r.", len(roots), self.key)
        return roots


def to_storage(node: InternalNode) -> StorageNode:
    if node.children is None:
        return StorageNode(title=node.title, url=node.url)
    return StorageNode(title=node.title, children=[to_storage(c) for c in node.children])


def dump_forest(roots: Sequence[InternalNode]) -> List[Dict[str, Any]]:
    return [to_storage(n).model_dump() for n in roots]


def build_internal(stored: StorageNode, parent: Optional[BookmarkFolder]) -> InternalNode:
    """Fresh internal node (and fresh handle) for a stored subtree."""
    if stored.children is None:
        handle = BookmarkItem(stored.title, stored.url)
        handle._bind_parent(parent)
        return InternalNode(title=stored.title, url=stored.url, children=None, external=handle)

    folder = BookmarkFolder(stored.title)
    folder._bind_parent(parent)
    children = [build_internal(c, folder) for c in stored.children]
    return InternalNode(title=stored.title, url=None, children=children, external=folder)
