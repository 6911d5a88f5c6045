"""
Locators - Price Extraction from Unstable Markup
================================================

Each locator takes parsed content (BeautifulSoup document or decoded JSON)
and returns a price, a price series, or the locator's "nothing found" value.

Current-value lookup is a chain of strategies tried in order: CSS selector
groups first (most specific to least), the whole visible body text last.
"""

import math
from typing import Any, Callable, Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup, Comment

from pricefeed.core.numbers import extract_all_numbers, extract_first_large_number
from pricefeed.utils.logger import get_logger

log = get_logger(__name__)

HISTORY_LIMIT = 7
ROW_SELECTORS = ("table tbody tr", "table tr")
_INVISIBLE_TAGS = {"script", "style", "noscript", "template", "head", "title"}

Strategy = Callable[[BeautifulSoup], Optional[int]]


def visible_text(soup: BeautifulSoup) -> str:
    """Text of the document body without script/style content."""
    root = soup.body or soup
    parts = []
    for node in root.find_all(string=True):
        if isinstance(node, Comment) or node.parent.name in _INVISIBLE_TAGS:
            continue
        parts.append(node)
    return " ".join(parts)


class SelectorStrategy:
    """First element matching a CSS selector group, then the numeric extractor."""

    def __init__(self, selector: str):
        self.selector = selector

    def __call__(self, soup: BeautifulSoup) -> Optional[int]:
        element = soup.select_one(self.selector)
        if element is None:
            return None
        text = element.get_text(" ")
        if not text.strip():
            return None
        return extract_first_large_number(text)

    def __repr__(self) -> str:
        return f"SelectorStrategy({self.selector!r})"


class BodyTextStrategy:
    """Last resort: first large number anywhere in the visible page text."""

    def __call__(self, soup: BeautifulSoup) -> Optional[int]:
        return extract_first_large_number(visible_text(soup))

    def __repr__(self) -> str:
        return "BodyTextStrategy()"


class CurrentValueLocator:
    """
    Locate the current price on a profile page.

    Args:
        selectors: CSS selector groups, highest confidence first
        strategies: explicit strategy chain; overrides ``selectors``
    """

    content_type = "html"

    def __init__(self, selectors: Sequence[str] = (), strategies: Optional[Iterable[Strategy]] = None):
        if strategies is None:
            strategies = [SelectorStrategy(sel) for sel in selectors]
            strategies.append(BodyTextStrategy())
        self.strategies: List[Strategy] = list(strategies)

    def __call__(self, soup: BeautifulSoup) -> Optional[int]:
        for strategy in self.strategies:
            value = strategy(soup)
            if value is not None:
                log.debug(f"{strategy!r} matched value {value}")
                return value
        return None

    @staticmethod
    def empty() -> Optional[int]:
        return None


class JsonValueLocator:
    """Read the price from a JSON API payload shaped ``{"data": {"p": ...}}``."""

    content_type = "json"

    def __call__(self, payload: Any) -> Optional[int]:
        if not isinstance(payload, dict):
            return None
        data = payload.get("data")
        if not isinstance(data, dict):
            return None

        price = data.get("p")
        if isinstance(price, bool):
            return None
        if isinstance(price, float) and not math.isfinite(price):
            return None
        if isinstance(price, (int, float)):
            return int(price) if price >= 0 else None
        if isinstance(price, str):
            # negative prices are a miss whatever their encoding
            if price.strip().startswith(("-", "\u2212")):
                return None
            return extract_first_large_number(price)
        return None

    @staticmethod
    def empty() -> Optional[int]:
        return None


class ArchiveHistoryLocator:
    """
    Locate up to ``limit`` recent prices in an archive table.

    Each row contributes the value of its last numeric cell; rows without a
    number are skipped. When no row yields a value, the visible body text is
    scanned for 5-15 digit tokens and used only if it provides a full series.
    """

    content_type = "html"

    def __init__(self, limit: int = HISTORY_LIMIT, row_selectors: Sequence[str] = ROW_SELECTORS):
        self.limit = limit
        self.row_selectors = tuple(row_selectors)

    def __call__(self, soup: BeautifulSoup) -> List[int]:
        prices = self._from_rows(soup)
        if prices:
            return prices

        numbers = extract_all_numbers(visible_text(soup), min_digits=5)
        if len(numbers) >= self.limit:
            log.debug(f"No archive rows matched, using {self.limit} numbers from body text")
            return numbers[: self.limit]
        return []

    def _from_rows(self, soup: BeautifulSoup) -> List[int]:
        for row_selector in self.row_selectors:
            rows = soup.select(row_selector)
            if not rows:
                continue

            prices: List[int] = []
            for row in rows:
                if len(prices) >= self.limit:
                    break
                candidate = None
                for cell in row.find_all("td"):
                    value = extract_first_large_number(cell.get_text(" "))
                    if value is not None:
                        candidate = value
                if candidate is not None:
                    prices.append(candidate)

            if prices:
                return prices
        return []

    @staticmethod
    def empty() -> List[int]:
        return []
