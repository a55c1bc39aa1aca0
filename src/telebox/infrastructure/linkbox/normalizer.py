"""Normalize Linkbox JSON and HTML responses into ``CatalogEntry`` lists.

JSON bodies are decoded into a loose document tree first; fields are then
read with per-field optionality so one malformed element never invalidates
its siblings.  HTML goes through CSS selector fallback chains.  Both paths
produce the same ``CatalogEntry`` shape.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any
from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup, Tag

from telebox.domain.entities.catalog import CatalogEntry, EntryKind, FileInfo
from telebox.infrastructure.common.converters import to_size_bytes
from telebox.infrastructure.common.html_selectors import (
    extract_text,
    first_attr,
    select_items,
)

from .constants import (
    LISTING_NAME_SELECTORS,
    LISTING_SELECTORS,
    UNKNOWN_FILE_NAME,
)

log = structlog.get_logger(__name__)

_JSON_KINDS = {"dir": EntryKind.FOLDER, "file": EntryKind.FILE}
_HTML_FOLDER_TYPES = {"dir", "folder"}


# ---------------------------------------------------------------------------
# Document tree helpers
# ---------------------------------------------------------------------------


def decode_json(body: str) -> Any:
    """Decode *body* into a JSON tree, ``None`` when it is not valid JSON."""
    if not body:
        return None
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        return None


def _walk(node: Any) -> Iterator[dict[str, Any]]:
    """Yield every mapping in *node*, depth-first, parents before children."""
    if isinstance(node, dict):
        yield node
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for value in node:
            yield from _walk(value)


def find_key(tree: Any, key: str) -> Any:
    """Return the first value stored under *key* anywhere in *tree*.

    Trees nested deeper than the interpreter recursion limit yield ``None``.
    """
    try:
        for mapping in _walk(tree):
            if key in mapping:
                return mapping[key]
    except RecursionError:
        log.debug("linkbox_json_too_deep", key=key)
    return None


def _id_str(raw: Any) -> str | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


def _name_str(raw: Any) -> str | None:
    if isinstance(raw, str) and raw.strip():
        return raw
    return None


# ---------------------------------------------------------------------------
# JSON path
# ---------------------------------------------------------------------------


def _entry_from_json(element: Any) -> CatalogEntry | None:
    if not isinstance(element, dict):
        return None

    entry_id = _id_str(element.get("id"))
    name = _name_str(element.get("name"))
    raw_type = element.get("type")
    kind = _JSON_KINDS.get(raw_type) if isinstance(raw_type, str) else None

    if entry_id is None or name is None or kind is None:
        return None

    return CatalogEntry(
        id=entry_id,
        name=name,
        kind=kind,
        size_bytes=to_size_bytes(element.get("size")),
    )


def parse_listing_json(body: str) -> list[CatalogEntry]:
    """Extract entries from a listing/search JSON body.

    Returns an empty list when the body is not JSON or carries no ``list``
    array.  Elements missing ``id``, ``name`` or ``type`` are skipped.
    """
    tree = decode_json(body)
    items = find_key(tree, "list")
    if not isinstance(items, list):
        log.debug("linkbox_json_list_missing")
        return []

    entries: list[CatalogEntry] = []
    skipped = 0
    for element in items:
        entry = _entry_from_json(element)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    if skipped:
        log.debug("linkbox_json_entries_skipped", skipped=skipped, kept=len(entries))
    return entries


def parse_file_info(body: str) -> FileInfo:
    """Extract ``name`` and optional ``size`` from a file-info body.

    Never fails: a missing name yields ``UNKNOWN_FILE_NAME``.
    """
    tree = decode_json(body)
    name = _name_str(find_key(tree, "name"))
    return FileInfo(
        name=name or UNKNOWN_FILE_NAME,
        size_bytes=to_size_bytes(find_key(tree, "size")),
    )


def extract_download_link(body: str) -> str | None:
    """Return the ``download_link`` value found anywhere in *body*."""
    link = find_key(decode_json(body), "download_link")
    if isinstance(link, str) and link.strip():
        return link.strip()
    return None


# ---------------------------------------------------------------------------
# HTML path
# ---------------------------------------------------------------------------


def _trailing_segment(href: str) -> str | None:
    path = urlparse(href).path.rstrip("/")
    if not path:
        return None
    segment = path.rsplit("/", 1)[-1]
    return segment or None


def _html_kind(element: Tag, href: str) -> EntryKind:
    data_type = first_attr(element, "data-type").lower()
    if data_type:
        return EntryKind.FOLDER if data_type in _HTML_FOLDER_TYPES else EntryKind.FILE

    classes = {c.lower() for c in (element.get("class") or [])}
    if classes & {"folder", "dir", "is-folder"}:
        return EntryKind.FOLDER

    if "/folder/" in href:
        return EntryKind.FOLDER
    return EntryKind.FILE


def _entry_from_html(element: Tag) -> CatalogEntry | None:
    name = extract_text(element, *LISTING_NAME_SELECTORS)
    if not name:
        return None

    anchor = element if element.name == "a" else element.select_one("a[href]")
    href = first_attr(anchor, "href") if anchor is not None else ""

    entry_id = first_attr(element, "data-id") or _trailing_segment(href)
    if not entry_id:
        return None

    return CatalogEntry(
        id=entry_id,
        name=name,
        kind=_html_kind(element, href),
        size_bytes=to_size_bytes(first_attr(element, "data-size")),
    )


def parse_listing_html(document: BeautifulSoup | Tag) -> list[CatalogEntry]:
    """Extract entries from the "my files" web page.

    Tries the class-based layout first, then legacy table rows.  Rows
    without a name or an identifier (headers, spacers) are skipped.
    """
    entries: list[CatalogEntry] = []
    for element in select_items(document, *LISTING_SELECTORS):
        entry = _entry_from_html(element)
        if entry is not None:
            entries.append(entry)
    return entries
