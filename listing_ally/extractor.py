"""
BeautifulSoup-based extraction of a product listing page into a ProductRecord.

Every field is located independently; a missing node yields an empty value,
never a failure. `extract` returns None only when the document itself cannot
be parsed into an element tree.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from .models import ProductRecord
from .preprocess import normalize_lines, normalize_text

logger = logging.getLogger(__name__)

IDENTIFIER_IN_ADDRESS = re.compile(r"/dp/([A-Z0-9]{10})")
RATING = re.compile(r"(\d+(?:\.\d+)?)\s+out\s+of\s+5", re.I)
COUNT = re.compile(r"\d[\d,.]*")
BEST_SELLERS_RANK = re.compile(r"Best\s+Sellers\s+Rank:?\s*#\s?([\d,]+)", re.I)
BYLINE_NOISE = re.compile(r"^(?:Visit\s+the\s+|Brand:\s*)|\s+Store$", re.I)

TITLE_SELECTORS = ["#productTitle"]
BRAND_SELECTORS = ["#bylineInfo", ".a-link-normal.contributorNameID"]
PRICE_SELECTORS = [".a-price-whole"]
DESCRIPTION_SELECTORS = ["#productDescription p", "#feature-bullets"]
BULLET_SELECTOR = "#feature-bullets li"
RATING_SELECTORS = ["#acrPopover", "#averageCustomerReviews span.a-icon-alt"]
REVIEW_COUNT_SELECTORS = ["#acrCustomerReviewText"]
CATEGORY_SELECTORS = ["#wayfinding-breadcrumbs_feature_div a"]
RANK_CONTAINERS = [
    "#productDetails_detailBullets_sections1",
    "#detailBulletsWrapper_feature_div",
    "#prodDetails",
    "#detailBullets_feature_div",
]


def identifier_from_address(address: str) -> str:
    m = IDENTIFIER_IN_ADDRESS.search(address or "")
    return m.group(1) if m else ""


def _first(soup: BeautifulSoup, selectors: List[str]) -> Optional[Tag]:
    # The first selector that matches a node wins, even if the node is empty.
    for sel in selectors:
        node = soup.select_one(sel)
        if node is not None:
            return node
    return None


def _text(soup: BeautifulSoup, selectors: List[str]) -> str:
    node = _first(soup, selectors)
    return normalize_text(node.get_text(" ")) if node is not None else ""


def _brand(soup: BeautifulSoup) -> str:
    raw = _text(soup, BRAND_SELECTORS)
    return BYLINE_NOISE.sub("", raw).strip()


def _bullets(soup: BeautifulSoup) -> List[str]:
    return normalize_lines(li.get_text(" ") for li in soup.select(BULLET_SELECTOR))


def _images(soup: BeautifulSoup) -> Optional[List[str]]:
    urls: List[str] = []
    landing = soup.select_one("#landingImage")
    if landing is not None:
        src = landing.get("data-old-hires") or landing.get("src")
        if src:
            urls.append(str(src).strip())
    for img in soup.select("#altImages img"):
        src = img.get("src")
        if src and str(src).strip() not in urls:
            urls.append(str(src).strip())
    return urls or None


def _rating(soup: BeautifulSoup) -> Optional[float]:
    node = _first(soup, RATING_SELECTORS)
    if node is None:
        return None
    candidates = [node.get("title") or "", node.get_text(" ")]
    for text in candidates:
        m = RATING.search(str(text))
        if m:
            return float(m.group(1))
    return None


def _review_count(soup: BeautifulSoup) -> Optional[int]:
    m = COUNT.search(_text(soup, REVIEW_COUNT_SELECTORS))
    if not m:
        return None
    digits = re.sub(r"[^\d]", "", m.group(0))
    return int(digits) if digits else None


def _category(soup: BeautifulSoup) -> Optional[str]:
    return _text(soup, CATEGORY_SELECTORS) or None


def _rank(soup: BeautifulSoup) -> Optional[int]:
    for sel in RANK_CONTAINERS:
        node = soup.select_one(sel)
        if node is None:
            continue
        m = BEST_SELLERS_RANK.search(normalize_text(node.get_text(" ")))
        if m:
            return int(m.group(1).replace(",", ""))
    return None


def parse_document(markup: Union[str, bytes, None]) -> Optional[BeautifulSoup]:
    """Build the element tree, or None when there is no document to work with."""
    if not isinstance(markup, (str, bytes)):
        return None
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("Markup rejected by parser: %s", exc)
        return None
    # Plain text or JSON bodies parse to a tree without a single element.
    if soup.find(True) is None:
        return None
    return soup


def extract(markup: Union[str, bytes, None], source_address: str) -> Optional[ProductRecord]:
    soup = parse_document(markup)
    if soup is None:
        return None

    price = _text(soup, PRICE_SELECTORS)
    record = ProductRecord(
        identifier=identifier_from_address(source_address),
        title=_text(soup, TITLE_SELECTORS),
        brand=_brand(soup),
        description=_text(soup, DESCRIPTION_SELECTORS),
        bullets=_bullets(soup),
        price=price or None,
        images=_images(soup),
        rating=_rating(soup),
        review_count=_review_count(soup),
        category=_category(soup),
        rank=_rank(soup),
    )
    logger.debug(
        "Extracted %s: title=%d chars, %d bullets",
        record.identifier or "(no id)", len(record.title), len(record.bullets),
    )
    return record
