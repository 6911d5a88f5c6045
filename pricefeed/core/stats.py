"""Summary statistics over a price history."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from pricefeed.core.errors import ConfigError
from pricefeed.core.models import Stats

ROUNDING_POLICIES = ("round", "floor")


def analyze(history: Sequence[int], rounding: str = "round") -> Stats:
    """
    Max, min and integer average of ``history``.

    ``rounding`` is "round" (nearest, halves up) or "floor". An empty history
    yields all-None stats.
    """
    if rounding not in ROUNDING_POLICIES:
        raise ConfigError(f"Unknown rounding policy: {rounding!r}", key="avg_rounding")
    if not history:
        return Stats(max=None, min=None, avg=None)

    mean = Decimal(sum(history)) / Decimal(len(history))
    if rounding == "floor":
        avg = math.floor(mean)
    else:
        avg = int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    return Stats(max=max(history), min=min(history), avg=avg)
