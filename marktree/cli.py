from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import load_settings
from .errors import BookmarkError, NotFoundError
from .log import LogConfig, get_logger, setup_logging
from .manager import BookmarkManager, open_manager
from .model import Bookmark, BookmarkFolder, BookmarkItem
from .netscape import import_tree, parse_netscape_html, write_netscape_html

log = get_logger(__name__)


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="marktree",
        description="Bookmark tree manager backed by a key-value store.",
    )
    p.add_argument("-V", "--version", action="version", version=f"marktree {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (optional). Env vars override defaults.")
    p.add_argument("--store", default=None, help="SQLite store path (overrides env/config).")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARN/ERROR (overrides env/config).")
    p.add_argument("--no-color", action="store_true", help="Disable colored logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    ls = sub.add_parser("list", help="List bookmarks in a folder (top level by default).")
    ls.add_argument("folder", nargs="?", default=None, help="Folder path, '/'-separated titles.")
    ls.add_argument("-r", "--recursive", action="store_true", help="Include the whole subtree.")

    af = sub.add_parser("add-folder", help="Create a folder.")
    af.add_argument("title")
    af.add_argument("--parent", default=None, help="Parent folder path.")

    ai = sub.add_parser("add-item", help="Create a bookmark item.")
    ai.add_argument("title")
    ai.add_argument("url")
    ai.add_argument("--parent", default=None, help="Parent folder path.")

    rm = sub.add_parser("remove", help="Remove a bookmark or folder (with its subtree).")
    rm.add_argument("path", nargs="?", default=None, help="Bookmark path, '/'-separated titles.")
    rm.add_argument("--all", action="store_true", help="Remove every bookmark.")

    sub.add_parser("dump", help="Print the stored JSON tree.")

    imp = sub.add_parser("import-html", help="Import a Netscape bookmarks HTML file.")
    imp.add_argument("file")
    imp.add_argument("--parent", default=None, help="Folder path to import into.")

    exp = sub.add_parser("export-html", help="Export the tree as Netscape bookmarks HTML.")
    exp.add_argument("file")
    exp.add_argument("--title", default="Bookmarks", help="Root title of the exported file.")

    args = p.parse_args(argv)
    cfg = load_settings(args.config)
    if args.store:
        cfg.store_path = args.store
        cfg.store_backend = "sqlite"
    if args.log_level:
        cfg.log_level = args.log_level
    if args.no_color:
        cfg.no_color = True
    setup_logging(LogConfig.from_settings(cfg))

    try:
        manager = open_manager(cfg)
        return _dispatch(args, manager)
    except BookmarkError as e:
        log.error("%s: %s", e.name, e.message)
        return 2


def _dispatch(args, manager: BookmarkManager) -> int:
    if args.cmd == "list":
        return _cmd_list(args, manager)
    if args.cmd == "add-folder":
        manager.add(BookmarkFolder(args.title), _folder_at(manager, args.parent))
        return 0
    if args.cmd == "add-item":
        manager.add(BookmarkItem(args.title, args.url), _folder_at(manager, args.parent))
        return 0
    if args.cmd == "remove":
        return _cmd_remove(args, manager)
    if args.cmd == "dump":
        print(json.dumps(manager.dump(), ensure_ascii=False, indent=2))
        return 0
    if args.cmd == "import-html":
        return _cmd_import(args, manager)
    if args.cmd == "export-html":
        write_netscape_html(out_path=Path(args.file), manager=manager, title_root=args.title)
        return 0
    return 2


def _cmd_list(args, manager: BookmarkManager) -> int:
    folder = _folder_at(manager, args.folder)
    base = _depth(folder)
    for h in manager.get(folder, args.recursive):
        indent = "  " * (_depth(h) - base - 1)
        if isinstance(h, BookmarkFolder):
            print(f"{indent}{h.title}/")
        else:
            print(f"{indent}{h.title}  {h.url}")
    return 0


def _cmd_remove(args, manager: BookmarkManager) -> int:
    if args.path is None:
        if not args.all:
            log.error("Refusing to remove every bookmark without --all.")
            return 2
        manager.remove()
        return 0
    manager.remove(_resolve_path(manager, args.path))
    return 0


def _cmd_import(args, manager: BookmarkManager) -> int:
    src = Path(args.file)
    if not src.exists():
        log.error("Input file not found: %s", src)
        return 2
    try:
        entries, _root_title = parse_netscape_html(src)
    except ValueError as e:
        log.error("Failed to parse bookmarks HTML: %s", e)
        return 2
    added, skipped = import_tree(manager, entries, _folder_at(manager, args.parent))
    log.info("Imported %d bookmarks from %s (%d duplicates skipped).", added, src, skipped)
    return 0


def _resolve_path(manager: BookmarkManager, path: str) -> Bookmark:
    parts = [x for x in path.split("/") if x]
    if not parts:
        raise NotFoundError("empty bookmark path")
    current: Optional[BookmarkFolder] = None
    found: Optional[Bookmark] = None
    for i, title in enumerate(parts):
        last = i == len(parts) - 1
        found = None
        for h in manager.get(current):
            if h.title == title and (last or isinstance(h, BookmarkFolder)):
                found = h
                # Prefer a folder when a folder and an item share the title.
                if isinstance(h, BookmarkFolder):
                    break
        if found is None:
            raise NotFoundError(f"no bookmark at '{'/'.join(parts[: i + 1])}'")
        if not last:
            current = found
    return found


def _folder_at(manager: BookmarkManager, path: Optional[str]) -> Optional[BookmarkFolder]:
    if not path or path.strip("/") == "":
        return None
    h = _resolve_path(manager, path)
    if not isinstance(h, BookmarkFolder):
        raise NotFoundError(f"'{path}' is not a folder")
    return h


def _depth(h: Optional[Bookmark]) -> int:
    n = 0
    while h is not None:
        n += 1
        h = h.parent
    return n
