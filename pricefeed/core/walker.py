"""
Candidate-URL walker.

Tries the candidate sources of one instrument/query in priority order and
returns the first non-empty locator result. Fetch failures, parse failures
and extraction misses all just move on to the next candidate.
"""

from typing import Any, Callable, Sequence

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from pricefeed.core.errors import FetchError, ParseError
from pricefeed.core.fetcher import Fetcher
from pricefeed.utils.logger import get_logger

log = get_logger(__name__)


def is_empty(result: Any) -> bool:
    return result is None or (isinstance(result, (list, tuple)) and len(result) == 0)


def empty_value(locate: Callable[[Any], Any]) -> Any:
    empty = getattr(locate, "empty", None)
    return empty() if callable(empty) else None


class CandidateWalker:
    def __init__(self, fetcher: Fetcher, parser: str = "lxml"):
        self.fetcher = fetcher
        self.parser = parser

    async def resolve(self, urls: Sequence[str], locate: Callable[[Any], Any], label: str = ""):
        """
        Walk ``urls`` with ``locate`` until one yields a non-empty result.

        ``locate`` may be a plain function of the parsed document. Locator
        objects can declare what they consume through ``content_type``
        ("html" or "json", default html) and their "nothing found" value
        through ``empty()`` (default None).
        """
        content_type = getattr(locate, "content_type", "html")

        for url in urls:
            try:
                document = await self._load(url, content_type)
                result = self._locate(locate, document, url)
            except FetchError as e:
                log.warning(f"[{label}] candidate failed {url}: {e.message}")
                continue
            except ParseError as e:
                log.warning(f"[{label}] could not parse {url}: {e.message}")
                continue

            if is_empty(result):
                log.debug(f"[{label}] no value found at {url}")
                continue

            log.info(f"[{label}] resolved from {url}")
            return result

        log.warning(f"[{label}] all {len(urls)} candidates exhausted")
        return empty_value(locate)

    @staticmethod
    def _locate(locate: Callable[[Any], Any], document: Any, url: str) -> Any:
        try:
            return locate(document)
        except Exception as e:
            raise ParseError(f"Locator failed: {e.__class__.__name__}: {e}", url=url) from e

    async def _load(self, url: str, content_type: str) -> Any:
        if content_type == "json":
            return await self.fetcher.fetch_json(url)

        html = await self.fetcher.fetch_html(url)
        try:
            return BeautifulSoup(html, self.parser)
        except (ParserRejectedMarkup, ValueError) as e:
            raise ParseError(f"Unparseable HTML: {e}", url=url) from e
