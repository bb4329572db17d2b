from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .model import Bookmark, InternalNode


@dataclass(frozen=True, eq=False)
class Position:
    """Where a handle lives in the live tree.

    ``index is None`` marks the implicit root; ``peers`` is then the
    top-level list.
    """

    peers: List[InternalNode]
    index: Optional[int]

    @property
    def is_root(self) -> bool:
        return self.index is None

    @property
    def node(self) -> Optional[InternalNode]:
        return None if self.index is None else self.peers[self.index]

    @property
    def children(self) -> Optional[List[InternalNode]]:
        """Peer list a new child would join, or None for an item."""
        if self.index is None:
            return self.peers
        return self.peers[self.index].children


def trace_of(handle: Bookmark) -> List[Bookmark]:
    """Handle plus its ancestors, ordered child to root."""
    trace: List[Bookmark] = []
    it: Optional[Bookmark] = handle
    while it is not None:
        trace.append(it)
        it = it.parent
    return trace


def resolve(roots: List[InternalNode], handle: Optional[Bookmark]) -> Optional[Position]:
    """Locate ``handle`` in the tree rooted at ``roots``.

    Each level is matched by identity against the handle's own ancestor
    chain. Returns None when any level fails to match, which is how stale
    handles (removed subtree, earlier load) show up.
    """
    if handle is None:
        return Position(roots, None)

    trace = trace_of(handle)
    peers: Optional[List[InternalNode]] = roots
    while trace:
        if peers is None:
            # Ancestor in the chain is an item in the live tree.
            return None
        wanted = trace.pop()
        index = _find(peers, wanted)
        if index is None:
            return None
        if not trace:
            return Position(peers, index)
        peers = peers[index].children
    return None


def _find(peers: List[InternalNode], handle: Bookmark) -> Optional[int]:
    for i, node in enumerate(peers):
        if node.external is handle:
            return i
    return None
