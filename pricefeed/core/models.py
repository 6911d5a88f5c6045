from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class InstrumentConfig:
    """Static description of one tracked instrument and its candidate sources."""
    key: str
    label: str
    now_urls: Tuple[str, ...] = ()
    history_urls: Tuple[str, ...] = ()
    api_urls: Tuple[str, ...] = ()
    selectors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Stats:
    max: Optional[int]
    min: Optional[int]
    avg: Optional[int]


@dataclass(frozen=True)
class Snapshot:
    """Current value, display string, recent history and stats for one instrument."""
    now: Optional[int]
    pretty: str
    history7: List[int] = field(default_factory=list)
    stats: Stats = field(default_factory=lambda: Stats(None, None, None))
    history_source: str = "archive"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
