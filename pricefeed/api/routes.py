from typing import AsyncIterator

from fastapi import APIRouter, Depends

from pricefeed.api.schemas import ErrorOut, HealthOut, PricesOut
from pricefeed.api.settings import get_feed_settings
from pricefeed.core.assembler import SnapshotAssembler, to_document
from pricefeed.core.config import FeedSettings
from pricefeed.core.fetcher import Fetcher
from pricefeed.utils.headers import HeaderManager

router = APIRouter()


async def get_assembler(
    settings: FeedSettings = Depends(get_feed_settings),
) -> AsyncIterator[SnapshotAssembler]:
    """One HTTP client per request, shared by all instrument lookups."""
    headers = HeaderManager(user_agents=settings.user_agents or None, referer=settings.referer)
    async with Fetcher(header_manager=headers, timeout=settings.timeout) as fetcher:
        yield SnapshotAssembler(settings, fetcher)


@router.get(
    "/prices",
    response_model=PricesOut,
    responses={500: {"model": ErrorOut}},
)
async def get_prices(assembler: SnapshotAssembler = Depends(get_assembler)):
    snapshots = await assembler.build_snapshot()
    return {"ok": True, "data": to_document(snapshots)}


@router.get("/health", response_model=HealthOut)
def health(settings: FeedSettings = Depends(get_feed_settings)):
    return HealthOut(status="ok", backend=settings.backend)
