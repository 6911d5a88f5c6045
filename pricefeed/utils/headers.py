"""
Headers Manager - Browser-like HTTP Headers
============================================

Builds browser-like request headers for upstream price pages:
- User-Agent rotation
- Content-aware Accept header (HTML pages vs JSON API)
- Referer pinned to the upstream site
"""

import random
from typing import Dict, Optional, Sequence

from pricefeed.utils.logger import get_logger

log = get_logger(__name__)

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/117.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
]

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
JSON_ACCEPT = "application/json, text/plain, */*"


class HeaderManager:
    """
    Produces request headers that look like a regular browser visit
    """

    def __init__(self, user_agents: Optional[Sequence[str]] = None, referer: Optional[str] = None):
        self.user_agents = list(user_agents or USER_AGENTS)
        self.referer = referer

    def get_headers(self, mode: str = "html", referer: Optional[str] = None) -> Dict[str, str]:
        """
        Generate a fresh set of headers.
        mode: 'html' for page scraping, 'json' for API calls
        """
        headers = {
            "User-Agent": random.choice(self.user_agents),
            "Accept": JSON_ACCEPT if mode == "json" else HTML_ACCEPT,
            "Accept-Language": "fa-IR,fa;q=0.9,en-US;q=0.8,en;q=0.7",
        }

        referer = referer or self.referer
        if referer:
            headers["Referer"] = referer

        return headers
