from typing import Dict, List, Optional

from pydantic import BaseModel


class StatsOut(BaseModel):
    max: Optional[int] = None
    min: Optional[int] = None
    avg: Optional[int] = None


class SnapshotOut(BaseModel):
    now: Optional[int] = None
    pretty: str
    history7: List[int] = []
    stats: StatsOut
    history_source: str


class PricesOut(BaseModel):
    ok: bool = True
    data: Dict[str, SnapshotOut]


class ErrorOut(BaseModel):
    ok: bool = False
    error: str


class HealthOut(BaseModel):
    status: str
    backend: str
