"""
Application service: descriptive statistics over a numeric series.
Pure functions only; no ports, no I/O.

Standard deviation is the population form (divisor N, not N - 1).
"""

import math
from statistics import fmean
from typing import Sequence

from src.domain.entities.price_record import StatSummary

PRECISION = 4


def compute_stats(values: Sequence[float]) -> StatSummary:
    """Summarise *values* as count, mean, extrema and population std-dev.

    An empty sequence yields an all-zero summary instead of NaN.
    """
    count = len(values)
    if count == 0:
        return StatSummary(count=0, avg=0.0, min=0.0, max=0.0, std_dev=0.0)

    avg = fmean(values)
    variance = math.fsum((value - avg) ** 2 for value in values) / count
    return StatSummary(
        count=count,
        avg=round(avg, PRECISION),
        min=round(float(min(values)), PRECISION),
        max=round(float(max(values)), PRECISION),
        std_dev=round(math.sqrt(variance), PRECISION),
    )
