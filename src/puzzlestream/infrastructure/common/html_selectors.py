"""CSS-selector-based HTML extraction with fallback chains.

Thin helpers over BeautifulSoup.  Every extraction function accepts a
primary selector and optional *fallback_selectors*: the first selector
that yields a non-empty value wins, so scrapers survive small markup
changes (extra wrapper ``<div>``, renamed CSS class, ...).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree using ``lxml``."""
    return BeautifulSoup(html, "lxml")


def select_items(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
) -> list[Tag]:
    """Select elements via CSS with a fallback chain.

    Returns results from the **first** selector that matches at least
    one element.
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
    """Extract stripped text from the first matching child element."""
    for sel in (selector, *fallback_selectors):
        match = element.select_one(sel)
        if match:
            text = match.get_text(strip=True)
            if text:
                return text
    return default


def extract_attr(
    element: Tag,
    selector: str,
    attr: str,
    *fallback_selectors: str,
    default: str = "",
) -> str:
    """Extract an attribute from the first matching child element."""
    for sel in (selector, *fallback_selectors):
        match = element.select_one(sel)
        if match:
            val = match.get(attr)
            if val:
                return str(val)
    return default


@dataclass(frozen=True)
class FieldSelector:
    """One row of a selector -> field mapping table.

    ``attr=None`` reads the element text, otherwise the named attribute.
    """

    selector: str
    attr: str | None = None
    fallbacks: tuple[str, ...] = ()


def extract_fields(
    element: Tag,
    mapping: Mapping[str, FieldSelector],
) -> dict[str, str]:
    """Apply a mapping table to *element*; missing fields map to ``""``."""
    fields: dict[str, str] = {}
    for name, field in mapping.items():
        if field.attr is None:
            fields[name] = extract_text(element, field.selector, *field.fallbacks)
        else:
            fields[name] = extract_attr(
                element, field.selector, field.attr, *field.fallbacks
            )
    return fields
