from marktree.mapper import resolve, trace_of
from marktree.model import BookmarkFolder, BookmarkItem, StorageNode
from marktree.serializer import build_internal


def _tree():
    stored = [
        StorageNode(title="Top", url="https://top.example/"),
        StorageNode(
            title="Dev",
            children=[
                StorageNode(title="Python", children=[StorageNode(title="Docs", url="https://docs.python.org/")]),
                StorageNode(title="GitHub", url="https://github.com/"),
            ],
        ),
    ]
    return [build_internal(s, None) for s in stored]


def test_resolve_none_is_root():
    roots = _tree()
    pos = resolve(roots, None)
    assert pos.is_root
    assert pos.peers is roots
    assert pos.node is None
    assert pos.children is roots


def test_resolve_top_level_and_nested():
    roots = _tree()
    top = roots[0].external
    pos = resolve(roots, top)
    assert pos.peers is roots and pos.index == 0

    dev = roots[1]
    docs = dev.children[0].children[0].external
    pos = resolve(roots, docs)
    assert pos.peers is dev.children[0].children
    assert pos.index == 0
    assert pos.node.external is docs
    assert pos.children is None


def test_resolve_folder_position_exposes_children():
    roots = _tree()
    python = roots[1].children[0]
    pos = resolve(roots, python.external)
    assert pos.children is python.children


def test_resolve_uses_identity_not_equality():
    roots = _tree()
    lookalike = BookmarkItem("Top", "https://top.example/")
    assert lookalike == roots[0].external
    assert resolve(roots, lookalike) is None


def test_resolve_fails_when_ancestor_was_removed():
    roots = _tree()
    docs = roots[1].children[0].children[0].external
    del roots[1].children[0]
    assert resolve(roots, docs) is None


def test_resolve_fails_for_handle_of_other_tree():
    roots = _tree()
    other = _tree()
    assert resolve(roots, other[1].children[1].external) is None


def test_resolve_fails_when_chain_passes_through_unknown_folder():
    roots = _tree()
    stray = BookmarkFolder("Dev")
    child = BookmarkItem("GitHub", "https://github.com/")
    child._bind_parent(stray)
    assert resolve(roots, child) is None


def test_trace_is_child_to_root():
    roots = _tree()
    docs = roots[1].children[0].children[0].external
    trace = trace_of(docs)
    assert [h.title for h in trace] == ["Docs", "Python", "Dev"]
    assert trace[-1].parent is None
