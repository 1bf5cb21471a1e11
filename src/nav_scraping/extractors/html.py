"""Helpers shared by the HTML table extractors."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import requests
from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ..core import HttpSettings, request
from .normalizers import parse_decimal

HEADING_TAGS = ("h2", "h3", "h4")

HeaderLabels = Sequence[Tuple[str, Sequence[str]]]


def fetch_page(
    session: requests.Session,
    url: str,
    settings: HttpSettings,
    logger: logging.Logger,
) -> bytes:
    """GET a page and return the raw bytes; the parser resolves the charset."""
    response = request(session, "GET", url, settings=settings, logger=logger)
    response.raise_for_status()
    return response.content


def parse_html(content: Union[str, bytes]) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def clean_text(value: Union[Tag, NavigableString, str, None]) -> str:
    """Entity-decoded text with whitespace runs collapsed to single spaces."""
    if value is None:
        return ""
    if isinstance(value, Tag):
        value = value.get_text(" ")
    return " ".join(str(value).split())


def select_by_class(root: Tag, tag: str, marker: str) -> List[Tag]:
    """Elements whose class attribute contains ``marker`` as a substring."""
    return root.select(f'{tag}[class*="{marker}"]')


def select_one_by_class(root: Tag, tag: str, marker: str) -> Optional[Tag]:
    return root.select_one(f'{tag}[class*="{marker}"]')


def has_class_marker(node: Tag, marker: str) -> bool:
    return marker in " ".join(node.get("class") or [])


def text_fragments(node: Optional[Tag]) -> List[str]:
    """Non-empty text nodes below ``node``, in document order."""
    if node is None:
        return []
    fragments = []
    for string in node.find_all(string=True):
        if isinstance(string, Comment):
            continue
        text = clean_text(string)
        if text:
            fragments.append(text)
    return fragments


def first_decimal(node: Optional[Tag]) -> Optional[Decimal]:
    for fragment in text_fragments(node):
        if fragment == "-":
            continue
        value = parse_decimal(fragment)
        if value is not None:
            return value
    return None


def previous_tag(node: Tag, name: str) -> Optional[Tag]:
    for sibling in node.previous_siblings:
        if isinstance(sibling, Tag) and sibling.name == name:
            return sibling
    return None


def direct_cells(row: Tag, names: Iterable[str] = ("td",)) -> List[Tag]:
    return row.find_all(list(names), recursive=False)


def is_category_heading(text: str, keywords: Sequence[str]) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def _is_heading_like(node: Tag) -> bool:
    return node.name in HEADING_TAGS or has_class_marker(node, "heading")


def find_nearest_category(table: Tag, keywords: Sequence[str]) -> str:
    """Closest preceding heading text naming a fund class, or ``""``.

    Previous text nodes and heading-like siblings of the table are checked
    first, then heading-like previous siblings of each ancestor.
    """
    for sibling in table.previous_siblings:
        if isinstance(sibling, Comment):
            continue
        if isinstance(sibling, Tag) and not _is_heading_like(sibling):
            continue
        text = clean_text(sibling)
        if is_category_heading(text, keywords):
            return text

    for parent in table.parents:
        for sibling in parent.previous_siblings:
            if not isinstance(sibling, Tag) or not _is_heading_like(sibling):
                continue
            text = clean_text(sibling)
            if is_category_heading(text, keywords):
                return text
    return ""


def header_row(table: Tag) -> Optional[Tag]:
    return table.select_one("thead tr") or table.find("tr")


def build_header_map(header_cells: Sequence[Tag], labels: HeaderLabels) -> Dict[int, str]:
    """Map column index -> field name by case-insensitive label containment.

    ``labels`` is ordered: a column takes the first field whose label it
    contains, and each field keeps the first column that matched it.
    """
    header_map: Dict[int, str] = {}
    assigned = set()
    for index, cell in enumerate(header_cells):
        header = clean_text(cell).lower()
        if not header:
            continue
        for field, candidates in labels:
            if field in assigned:
                continue
            if any(candidate.lower() in header for candidate in candidates):
                header_map[index] = field
                assigned.add(field)
                break
    return header_map


def read_row(cells: Sequence[Tag], header_map: Dict[int, str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for index, field in header_map.items():
        if index < len(cells):
            values[field] = clean_text(cells[index])
    return values
