"""
Sample collection for one (backend, operation) pair.
"""

import logging
from typing import Dict, List, Optional

from common.metrics_utils import aggregate, calculate_throughput
from common.operations import Backend
from persistence.record import Sample
from persistence.report import ObjectCount, PerfStats, Summary

logger = logging.getLogger(__name__)


class SampleCollector:
    """Collects the ordered samples of one backend and operation."""

    def __init__(self, backend: Backend, operation: str):
        self.backend = backend
        self.operation = operation
        self.records: List[Sample] = []
        self.object_count = ObjectCount()

    def add_record(self, record: Sample) -> None:
        """Add a sample and tally its compression classification if present."""
        if record.backend is not self.backend:
            raise ValueError(
                f"Sample for {record.backend.value} added to {self.backend.value} collector"
            )
        self.records.append(record)
        if record.compressed is not None:
            self.object_count.add(record.compressed)
        logger.debug(f"Recorded {record}")

    def __len__(self):
        return len(self.records)

    def durations(self) -> List[float]:
        return [r.duration_ms for r in self.records]

    def throughputs(self) -> List[float]:
        """Per-call objects/ms; calls with no measurable duration are skipped."""
        rates = []
        for r in self.records:
            rate = calculate_throughput(r.object_count or 0, r.duration_ms)
            if rate is not None:
                rates.append(rate)
        return rates

    def sizes(self) -> List[int]:
        return [r.object_size for r in self.records if r.object_size is not None]

    def get_summary(self, per_call_throughput: bool = False,
                    track_sizes: bool = False) -> PerfStats:
        """Reduce the collected samples to PerfStats.

        Args:
            per_call_throughput: Summarize per-call objects/ms samples instead of
                a single count over total duration rate
            track_sizes: Include the object size summary
        """
        durations = self.durations()
        throughput: Optional[Summary] = None
        throughput_rate = None
        if per_call_throughput:
            throughput = aggregate(self.throughputs())
        else:
            throughput_rate = calculate_throughput(len(durations), sum(durations))

        return PerfStats(
            latency=aggregate(durations),
            throughput=throughput,
            throughput_rate=throughput_rate,
            object_size=aggregate(self.sizes()) if track_sizes else None,
            sample_count=len(durations),
        )


def count_key(backend: Backend) -> str:
    return f"{backend.value}_count"


def collect_counts(collectors: List[SampleCollector]) -> Dict[str, ObjectCount]:
    """Object counts keyed by "<backend>_count"."""
    return {count_key(c.backend): c.object_count for c in collectors}
