from marktree.model import BookmarkFolder, BookmarkItem, InternalNode
from marktree.traverse import UNLIMITED, traverse


def _item(title):
    return InternalNode(title=title, url=f"https://{title}.example/", children=None,
                        external=BookmarkItem(title, f"https://{title}.example/"))


def _folder(title, children):
    return InternalNode(title=title, url=None, children=children, external=BookmarkFolder(title))


def _forest():
    # a, F[b, G[c], d], e
    return [
        _item("a"),
        _folder("F", [_item("b"), _folder("G", [_item("c")]), _item("d")]),
        _item("e"),
    ]


def _titles(handles):
    return [h.title for h in handles]


def test_traverse_empty_list():
    assert traverse([], 0) == []
    assert traverse([], UNLIMITED) == []


def test_traverse_depth_zero_is_peers_only():
    assert _titles(traverse(_forest(), 0)) == ["a", "F", "e"]


def test_traverse_unlimited_is_preorder():
    assert _titles(traverse(_forest(), UNLIMITED)) == ["a", "F", "b", "G", "c", "d", "e"]


def test_traverse_bounded_depth_applies_per_subtree():
    forest = _forest()
    forest.append(_folder("H", [_item("x")]))
    # depth 1: children of F and H are listed, G's children are not.
    assert _titles(traverse(forest, 1)) == ["a", "F", "b", "G", "d", "e", "H", "x"]


def test_traverse_returns_the_owned_handles():
    forest = _forest()
    out = traverse(forest, 0)
    assert all(h is n.external for h, n in zip(out, forest))
