"""CSS-selector-based HTML extraction with fallback chains.

The provider's web pages drift between a class-based layout and an older
table layout.  Every helper takes a primary selector plus optional
*fallback_selectors*; the first selector that yields a match wins.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (lxml parser)."""
    return BeautifulSoup(html, "lxml")


def select_items(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
) -> list[Tag]:
    """Select elements via CSS with a fallback chain.

    Returns results from the **first** selector matching at least one element.
    """
    for sel in (selector, *fallback_selectors):
        items = root.select(sel)
        if items:
            return items
    return []


def extract_text(
    element: Tag,
    selector: str,
    *fallback_selectors: str,
    default: str = "",
) -> str:
    """Extract stripped text from the first matching child element.

    With ``selector=""`` the element's own text is returned.
    """
    if selector == "":
        return element.get_text(strip=True) or default

    for sel in (selector, *fallback_selectors):
        match = element.select_one(sel)
        if match:
            text = match.get_text(strip=True)
            if text:
                return text
    return default


def first_attr(element: Tag, *attrs: str) -> str:
    """Return the first non-empty attribute of *element* among *attrs*."""
    for attr in attrs:
        val = element.get(attr)
        if isinstance(val, list):
            val = " ".join(val)
        if val and str(val).strip():
            return str(val).strip()
    return ""
