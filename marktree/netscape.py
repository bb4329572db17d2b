from __future__ import annotations

import html
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup  # type: ignore

from .errors import DuplicateError
from .log import get_logger
from .manager import BookmarkManager
from .model import BookmarkFolder, BookmarkItem

log = get_logger(__name__)
_WS_RE = re.compile(r"\s+")

Entry = Dict[str, Any]


def parse_netscape_html(path: Path) -> Tuple[List[Entry], str]:
    """Read a Netscape bookmark file into nested ``{"title", "url" | "children"}`` entries."""
    text = path.read_text(encoding="utf-8", errors="replace")
    soup = BeautifulSoup(text, "lxml")

    h1 = soup.find("h1")
    root_title = h1.get_text(strip=True) if h1 else "Bookmarks"

    dl = soup.find("dl")
    if dl is None:
        raise ValueError("Could not find <DL> root in bookmarks file")
    return _walk_dl(dl), root_title


def _walk_dl(dl) -> List[Entry]:
    out: List[Entry] = []
    # Unclosed <DT> tags may nest siblings inside each other, so collect every
    # <DT> whose closest <DL> is this one.
    for dt in dl.find_all("dt"):
        if dt.find_parent("dl") is not dl:
            continue
        h3 = dt.find("h3", recursive=False)
        if h3 is not None:
            name = _WS_RE.sub(" ", h3.get_text(strip=True)) or "Untitled folder"
            nxt = h3.find_next(["dl", "h3", "a"])
            if nxt is None or nxt.name != "dl":
                log.warning("Folder without DL: %s", name)
                continue
            out.append({"title": name, "children": _walk_dl(nxt)})
            continue

        a = dt.find("a", recursive=False)
        if a is not None and a.get("href"):
            url = a.get("href")
            title = _WS_RE.sub(" ", a.get_text(strip=True)) or url
            out.append({"title": title, "url": url})
    return out


def import_tree(
    manager: BookmarkManager,
    entries: List[Entry],
    parent: Optional[BookmarkFolder] = None,
) -> Tuple[int, int]:
    """Add parsed entries under ``parent``.

    Folders that already exist are merged into; duplicate items are skipped.
    Returns ``(added, skipped)``.
    """
    added = skipped = 0
    for entry in entries:
        if "children" in entry:
            folder = BookmarkFolder(entry["title"])
            try:
                manager.add(folder, parent)
                added += 1
            except DuplicateError:
                folder = _existing_folder(manager, parent, entry["title"])
            a, s = import_tree(manager, entry["children"], folder)
            added += a
            skipped += s
            continue

        try:
            manager.add(BookmarkItem(entry["title"], entry["url"]), parent)
            added += 1
        except DuplicateError:
            log.debug("Skipping duplicate item: %s", entry["title"])
            skipped += 1
    return added, skipped


def _existing_folder(manager: BookmarkManager, parent: Optional[BookmarkFolder], title: str) -> BookmarkFolder:
    for h in manager.get(parent):
        if isinstance(h, BookmarkFolder) and h.title == title:
            return h
    raise DuplicateError(f"folder '{title}' collided but could not be found")


def write_netscape_html(
    *,
    out_path: Path,
    manager: BookmarkManager,
    title_root: str = "Bookmarks",
) -> int:
    """Write the manager's tree as a Netscape bookmark file. Returns the number of entries written."""
    lines: List[str] = []
    lines.append("<!DOCTYPE NETSCAPE-Bookmark-file-1>")
    lines.append("<!-- This is an automatically generated file. DO NOT EDIT! -->")
    lines.append('<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">')
    lines.append(f"<TITLE>{html.escape(title_root)}</TITLE>")
    lines.append(f"<H1>{html.escape(title_root)}</H1>")
    lines.append("<DL><p>")
    count = _write_folder(lines, manager, None, indent="    ")
    lines.append("</DL><p>")

    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    log.info("Wrote %d bookmarks to %s", count, out_path)
    return count


def _write_folder(lines: List[str], manager: BookmarkManager, folder: Optional[BookmarkFolder], indent: str) -> int:
    count = 0
    for h in manager.get(folder):
        count += 1
        if isinstance(h, BookmarkFolder):
            lines.append(f"{indent}<DT><H3>{html.escape(h.title)}</H3>")
            lines.append(f"{indent}<DL><p>")
            count += _write_folder(lines, manager, h, indent + "    ")
            lines.append(f"{indent}</DL><p>")
        else:
            lines.append(f'{indent}<DT><A HREF="{html.escape(h.url, quote=True)}">{html.escape(h.title)}</A>')
    return count
