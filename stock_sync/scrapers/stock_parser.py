"""Pure functions for reading the "Available Stock" figure from page content.

Both scraper strategies funnel through here, so the heuristics can be tested
against fixture text/HTML without a browser or network.
"""

import re
from typing import Iterator, Optional

from bs4 import BeautifulSoup, Comment, Tag

from stock_sync.errors import StockNotFound, StockUnparsable

STOCK_LABEL_PATTERN = re.compile(r"Available\s*Stock", re.IGNORECASE)
STOCK_VALUE_PATTERN = re.compile(r"Available\s*Stock\s*:?\s*(\d+)", re.IGNORECASE)
DIGITS_PATTERN = re.compile(r"\d+")

# Text inside these never counts as a visible label
NON_VISIBLE_TAGS = {"script", "style", "noscript", "template", "title", "head"}
PAGE_ROOT_TAGS = {"body", "html", "[document]"}

# How far above the label to look for a value sibling
MAX_LABEL_ANCESTORS = 2


def normalize_text(text: str) -> str:
    """Collapse all whitespace runs into single spaces."""
    return " ".join(text.split())


def parse_first_number(text: str) -> Optional[int]:
    """Return the first run of digits in text as an int.

    Examples:
        >>> parse_first_number("109 Meters")
        109
        >>> parse_first_number("Out of stock") is None
        True
    """
    match = DIGITS_PATTERN.search(text or "")
    return int(match.group(0)) if match else None


def parse_labelled_number(text: str) -> Optional[int]:
    """Return the number directly following "Available Stock" in text, if any."""
    match = STOCK_VALUE_PATTERN.search(text or "")
    return int(match.group(1)) if match else None


def parse_stock_from_text(text: str) -> int:
    """Extract the stock quantity from rendered page text.

    Args:
        text: Visible page text (e.g., "... Available Stock: 109 Meters ...")

    Returns:
        Stock quantity

    Raises:
        StockNotFound: If the label does not occur
        StockUnparsable: If the label occurs without a number after it
    """
    if not STOCK_LABEL_PATTERN.search(text or ""):
        raise StockNotFound("No 'Available Stock' label in page text")

    quantity = parse_labelled_number(text)
    if quantity is None:
        raise StockUnparsable("'Available Stock' label has no number after it")
    return quantity


def _iter_label_elements(soup: BeautifulSoup) -> Iterator[Tag]:
    for node in soup.find_all(string=STOCK_LABEL_PATTERN):
        parent = node.parent
        if isinstance(node, Comment) or parent is None:
            continue
        if parent.name in NON_VISIBLE_TAGS:
            continue
        yield parent


def _quantity_near_label(label: Tag) -> Optional[int]:
    # Label and number in the same element: "Available Stock: 109"
    quantity = parse_labelled_number(normalize_text(label.get_text(" ")))
    if quantity is not None:
        return quantity

    # Bare text after the label: <p><b>Available Stock:</b> 109</p>
    container = label.parent
    if container is not None:
        quantity = parse_labelled_number(normalize_text(container.get_text(" ")))
        if quantity is not None:
            return quantity

    # Sibling layout, label possibly wrapped:
    # <div class="title"><span>Available Stock</span></div><div class="value">109</div>
    node: Optional[Tag] = label
    for _ in range(MAX_LABEL_ANCESTORS + 1):
        if node is None or node.name in PAGE_ROOT_TAGS:
            break
        sibling = node.find_next_sibling()
        if sibling is not None:
            quantity = parse_first_number(sibling.get_text(" "))
            if quantity is not None:
                return quantity
        node = node.parent
    return None


def parse_stock_from_html(html: str) -> int:
    """Extract the stock quantity from static HTML.

    Tries each label in document order; the first one with a readable number
    wins.

    Args:
        html: Raw supplier page HTML

    Returns:
        Stock quantity

    Raises:
        StockNotFound: If no visible element contains the label
        StockUnparsable: If labels exist but none has a number next to it
    """
    soup = BeautifulSoup(html or "", "lxml")

    labels = list(_iter_label_elements(soup))
    if not labels:
        raise StockNotFound("No 'Available Stock' label in page HTML")

    for label in labels:
        quantity = _quantity_near_label(label)
        if quantity is not None:
            return quantity

    raise StockUnparsable(
        f"Found {len(labels)} 'Available Stock' label(s) but no number next to them"
    )
