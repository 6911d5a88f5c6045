from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from pricefeed.core.config import FeedSettings
from pricefeed.core.fetcher import Fetcher
from pricefeed.core.history import ArchiveHistory, SyntheticHistory
from pricefeed.core.locators import CurrentValueLocator, JsonValueLocator
from pricefeed.core.models import InstrumentConfig, Snapshot
from pricefeed.core.stats import analyze
from pricefeed.core.walker import CandidateWalker
from pricefeed.utils.formatting import format_price
from pricefeed.utils.logger import get_logger, log_execution_time


class SnapshotAssembler:
    """
    Builds the per-request price document.

    Current values of all instruments are resolved concurrently, then their
    histories (also concurrently). A failing instrument only ends up as an
    unavailable value; it never cancels or fails its siblings.
    """

    def __init__(self, settings: FeedSettings, fetcher: Fetcher) -> None:
        self._settings = settings
        self._walker = CandidateWalker(fetcher)
        self._log = get_logger(__name__)

        if settings.history == "synthetic":
            self._history = SyntheticHistory(step_ratio=settings.synthetic_step_ratio)
        else:
            self._history = ArchiveHistory(self._walker)

    async def resolve_now(self, instrument: InstrumentConfig) -> Optional[int]:
        label = f"{instrument.key}:now"
        if self._settings.backend == "api":
            return await self._walker.resolve(instrument.api_urls, JsonValueLocator(), label=label)
        locator = CurrentValueLocator(instrument.selectors)
        return await self._walker.resolve(instrument.now_urls, locator, label=label)

    async def resolve_history(self, instrument: InstrumentConfig, now: Optional[int]) -> List[int]:
        return await self._history.history(instrument, now)

    @log_execution_time
    async def build_snapshot(self) -> Dict[str, Snapshot]:
        instruments = self._settings.instruments
        self._log.info("Building price snapshot for {}", [i.key for i in instruments])

        now_values = await asyncio.gather(*(self.resolve_now(i) for i in instruments))
        histories = await asyncio.gather(
            *(self.resolve_history(i, now) for i, now in zip(instruments, now_values))
        )

        snapshots: Dict[str, Snapshot] = {}
        for instrument, now, history in zip(instruments, now_values, histories):
            snapshots[instrument.key] = Snapshot(
                now=now,
                pretty=format_price(now, self._settings.locale, self._settings.unavailable_label),
                history7=list(history),
                stats=analyze(history, rounding=self._settings.avg_rounding),
                history_source=self._history.source,
            )

        self._log.info(
            "Snapshot ready: {}",
            {key: snap.now for key, snap in snapshots.items()},
        )
        return snapshots


def to_document(snapshots: Dict[str, Snapshot]) -> Dict[str, Any]:
    """JSON-ready mapping of instrument key to snapshot."""
    return {key: snapshot.as_dict() for key, snapshot in snapshots.items()}
