"""
History strategies.

Both produce a "7-point series, most recent first" for one instrument:

- ArchiveHistory scrapes the instrument's archive pages.
- SyntheticHistory derives a decreasing series from the current value; it is
  tagged "synthetic" in the output so it is never mistaken for scraped data.
"""

from decimal import Decimal
from typing import List, Optional

from pricefeed.core.locators import HISTORY_LIMIT, ArchiveHistoryLocator
from pricefeed.core.models import InstrumentConfig
from pricefeed.core.walker import CandidateWalker


class ArchiveHistory:
    source = "archive"

    def __init__(self, walker: CandidateWalker, locator: Optional[ArchiveHistoryLocator] = None):
        self.walker = walker
        self.locator = locator or ArchiveHistoryLocator()

    async def history(self, instrument: InstrumentConfig, now: Optional[int]) -> List[int]:
        return await self.walker.resolve(
            instrument.history_urls, self.locator, label=f"{instrument.key}:history"
        )


class SyntheticHistory:
    source = "synthetic"

    def __init__(self, step_ratio: float = 0.005, points: int = HISTORY_LIMIT):
        self.step_ratio = step_ratio
        self.points = points

    async def history(self, instrument: InstrumentConfig, now: Optional[int]) -> List[int]:
        if now is None:
            return []
        step = Decimal(str(self.step_ratio))
        return [int(Decimal(now) * (1 - step * i)) for i in range(self.points)]
