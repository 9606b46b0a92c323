"""
Shared utilities for benchmark metrics calculations: averages, nearest-rank percentiles and throughput.
"""

import logging
from typing import Optional, Sequence

import pandas as pd

from configuration import P50_FRACTION, P90_FRACTION
from persistence.report import Summary

logger = logging.getLogger(__name__)


def nearest_rank(sorted_values: pd.Series, fraction: float):
    """
    Pick the sample at position int(n * fraction) of an ascending series.

    This is index based, not interpolated: p50 is sorted[n // 2] and p90 is
    sorted[int(n * 0.9)]. Regression comparisons against earlier runs depend on
    these exact positions, so do not switch to Series.quantile().

    Args:
        sorted_values: Series sorted ascending with a 0..n-1 index
        fraction: Percentile as a fraction in [0, 1)

    Returns:
        The selected sample as a native Python number, or None when empty
    """
    n = len(sorted_values)
    if n == 0:
        return None
    value = sorted_values.iloc[int(n * fraction)]
    return value.item() if hasattr(value, "item") else value


def aggregate(samples: Sequence[float]) -> Summary:
    """
    Reduce samples (durations, throughputs or sizes) to average, p50 and p90.

    Args:
        samples: Numeric samples in any order

    Returns:
        Summary with the arithmetic mean (0.0 for no samples) and nearest-rank
        p50/p90 (None for no samples)
    """
    if len(samples) == 0:
        return Summary(average=0.0, p50=None, p90=None)

    values = pd.Series(list(samples)).sort_values().reset_index(drop=True)

    return Summary(
        average=float(values.mean()),
        p50=nearest_rank(values, P50_FRACTION),
        p90=nearest_rank(values, P90_FRACTION),
    )


def calculate_throughput(object_count: int, total_duration_ms: float) -> Optional[float]:
    """
    Calculate throughput in objects per millisecond.

    A zero total duration has no meaningful rate, so None is returned instead
    of inventing one.

    Args:
        object_count: Number of objects served or operations completed
        total_duration_ms: Elapsed milliseconds

    Returns:
        Objects per millisecond, or None when the duration is not positive
    """
    if total_duration_ms <= 0:
        logger.warning(
            f"Throughput undefined for {object_count} objects over {total_duration_ms} ms"
        )
        return None
    return object_count / total_duration_ms
