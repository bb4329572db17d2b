from __future__ import annotations

from typing import List, Sequence

from .model import Bookmark, InternalNode

UNLIMITED = -1


def traverse(peers: Sequence[InternalNode], depth: int = 0) -> List[Bookmark]:
    """Pre-order list of handles under ``peers``.

    ``depth`` 0 yields the peers only, ``UNLIMITED`` walks the whole subtree.
    """
    out: List[Bookmark] = []
    _walk(peers, depth, out)
    return out


def _walk(peers: Sequence[InternalNode], depth: int, out: List[Bookmark]) -> None:
    for node in peers:
        out.append(node.external)
        if depth != 0 and node.children:
            _walk(node.children, depth if depth == UNLIMITED else depth - 1, out)
