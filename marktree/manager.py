from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from .errors import DuplicateError, NotFoundError
from .log import get_logger
from .mapper import Position, resolve
from .model import Bookmark, InternalNode
from .permissions import Operation, PermissionGate
from .serializer import DEFAULT_KEY, Serializer, dump_forest
from .store import BlobStore, MemoryStore, SqliteStore
from .traverse import UNLIMITED, traverse
from .validate import coerce_bookmark, coerce_bool

log = get_logger(__name__)


class BookmarkManager:
    """Bookmark tree with stable handles, permission checks and persistence.

    The tree is loaded from ``store`` on construction. Every ``add`` and
    ``remove`` writes the whole tree back before returning.
    """

    def __init__(
        self,
        store: BlobStore,
        *,
        key: str = DEFAULT_KEY,
        gate: Optional[PermissionGate] = None,
    ):
        self.serializer = Serializer(store, key)
        self.gate = gate or PermissionGate()
        self.bookmarks: List[InternalNode] = []
        self.reload()

    # lifecycle

    def reload(self) -> None:
        """Rebuild the live tree from the store. Earlier handles go stale."""
        self.bookmarks = self.serializer.load()

    def reset(self) -> None:
        self.gate.reset()
        self.reload()

    # public API

    def get(self, parent_folder: Optional[Bookmark] = None, recursive: Any = False) -> List[Bookmark]:
        self.gate.check(Operation.GET)
        parent_folder = coerce_bookmark(parent_folder, optional=True)
        recursive = coerce_bool(recursive)

        peers = self._folder_children(parent_folder)
        return traverse(peers, UNLIMITED if recursive else 0)

    def add(self, bookmark: Bookmark, parent_folder: Optional[Bookmark] = None) -> None:
        self.gate.check(Operation.ADD)
        bookmark = coerce_bookmark(bookmark)
        parent_folder = coerce_bookmark(parent_folder, optional=True)

        peers = self._folder_children(parent_folder)
        if resolve(self.bookmarks, bookmark) is not None:
            raise DuplicateError(f"bookmark '{bookmark.title}' is already in the tree")
        if _has_peer(peers, bookmark):
            kind = "folder" if bookmark.is_folder else "item"
            raise DuplicateError(f"{kind} '{bookmark.title}' already exists here")

        peers.append(_new_node(bookmark))
        try:
            self._persist()
        except Exception:
            peers.pop()
            raise
        bookmark._bind_parent(parent_folder)
        log.info("Added %s '%s'.", "folder" if bookmark.is_folder else "item", bookmark.title)

    def remove(self, bookmark: Optional[Bookmark] = None) -> None:
        self.gate.check(Operation.REMOVE)
        bookmark = coerce_bookmark(bookmark, optional=True)

        if bookmark is None:
            previous, self.bookmarks = self.bookmarks, []
            try:
                self._persist()
            except Exception:
                self.bookmarks = previous
                raise
            log.info("Removed all bookmarks.")
            return

        pos = resolve(self.bookmarks, bookmark)
        if pos is None:
            raise NotFoundError(f"bookmark '{bookmark.title}' is not in the tree")
        node = pos.peers.pop(pos.index)
        try:
            self._persist()
        except Exception:
            pos.peers.insert(pos.index, node)
            raise
        log.info("Removed '%s'.", bookmark.title)

    def set_permissions(self, capability: str, operations: Iterable[Union[Operation, str]]) -> None:
        self.gate.set_permissions(capability, operations)

    def register_features(self, capabilities: Iterable[str]) -> None:
        self.gate.register_features(capabilities)

    def dump(self) -> List[Dict[str, Any]]:
        """Storage form of the live tree."""
        return dump_forest(self.bookmarks)

    # internals

    def _folder_children(self, parent_folder: Optional[Bookmark]) -> List[InternalNode]:
        pos: Optional[Position] = resolve(self.bookmarks, parent_folder)
        if pos is None:
            raise NotFoundError(f"folder '{parent_folder.title}' is not in the tree")
        if pos.children is None:
            raise NotFoundError(f"'{parent_folder.title}' is not a folder")
        return pos.children

    def _persist(self) -> None:
        self.serializer.persist(self.bookmarks)


def _has_peer(peers: List[InternalNode], bookmark: Bookmark) -> bool:
    return any(p.title == bookmark.title and p.is_folder == bookmark.is_folder for p in peers)


def _new_node(bookmark: Bookmark) -> InternalNode:
    if bookmark.is_folder:
        return InternalNode(title=bookmark.title, url=None, children=[], external=bookmark)
    return InternalNode(title=bookmark.title, url=bookmark.url, children=None, external=bookmark)


def open_manager(settings) -> BookmarkManager:
    """Build the store named by ``settings`` and load a manager from it."""
    if settings.store_backend == "memory":
        store: BlobStore = MemoryStore()
    else:
        store = SqliteStore(settings.store_path)
    manager = BookmarkManager(store, key=settings.store_key)
    if settings.capabilities:
        manager.register_features(settings.capabilities)
    log.debug("Opened %s bookmark store (key=%r).", settings.store_backend, settings.store_key)
    return manager
