"""
Process entry point.

    pricefeed serve       # run the HTTP API (PORT, default 3000)
    pricefeed snapshot    # fetch once and print the JSON document
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
from typing import Any, Dict, Optional, Sequence

import uvicorn
from dotenv import load_dotenv

from pricefeed.api.settings import get_api_settings
from pricefeed.core.assembler import SnapshotAssembler, to_document
from pricefeed.core.config import FeedSettings, load_feed_settings
from pricefeed.core.fetcher import Fetcher
from pricefeed.utils.headers import HeaderManager
from pricefeed.utils.logger import get_logger, setup_logging


async def run_snapshot(settings: FeedSettings) -> Dict[str, Any]:
    headers = HeaderManager(user_agents=settings.user_agents or None, referer=settings.referer)
    async with Fetcher(header_manager=headers, timeout=settings.timeout) as fetcher:
        snapshots = await SnapshotAssembler(settings, fetcher).build_snapshot()
    return {"ok": True, "data": to_document(snapshots)}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="TGJU price snapshot service")
    parser.add_argument("command", nargs="?", choices=("serve", "snapshot"), default="serve")
    parser.add_argument("--settings", help="Path to an alternative settings.yaml")
    parser.add_argument("--backend", choices=("html", "api"), help="Override the configured backend")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    setup_logging(args.settings)
    log = get_logger(__name__)

    overrides = {"backend": args.backend} if args.backend else None
    settings = load_feed_settings(args.settings, overrides=overrides)

    if args.command == "snapshot":
        document = asyncio.run(run_snapshot(settings))
        print(json.dumps(document, ensure_ascii=False, indent=2))
        return

    # the server process reloads settings from the environment
    if args.settings:
        os.environ["PRICEFEED_SETTINGS"] = args.settings
    if args.backend:
        os.environ["PRICEFEED_BACKEND"] = args.backend

    api = get_api_settings()
    log.info(f"pricefeed api listening on {api.host}:{api.port} (backend={settings.backend})")
    uvicorn.run(
        "pricefeed.api.app:app",
        host=api.host,
        port=api.port,
        reload=api.reload,
        log_level=api.log_level,
    )


if __name__ == "__main__":
    main()
