"""
Result value types: percentile summaries, per-backend performance statistics,
object counts, content comparisons and the combined report.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


def _format(value: Optional[float], unit: str, fmt: str = "{:.2f}") -> str:
    if value is None:
        return "n/a"
    return f"{fmt.format(value)} {unit}"


@dataclass(frozen=True)
class Summary:
    """Average and nearest-rank p50/p90 of one sample set."""

    average: float
    p50: Optional[float]
    p90: Optional[float]

    def render(self, unit: str, percentile_fmt: str = "{:.2f}") -> Dict[str, str]:
        return {
            "average": _format(self.average, unit),
            "p50": _format(self.p50, unit, percentile_fmt),
            "p90": _format(self.p90, unit, percentile_fmt),
        }


@dataclass(frozen=True)
class PerfStats:
    """Performance statistics of one (backend, operation) sample set.

    Throughput is either a percentile summary of per-call samples (list) or a
    single aggregate rate of count over total duration (put, delete, get).
    """

    latency: Summary
    throughput: Optional[Summary] = None
    throughput_rate: Optional[float] = None
    object_size: Optional[Summary] = None
    sample_count: int = 0

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        result = {"latency": self.latency.render("ms", percentile_fmt="{:.0f}")}
        if self.throughput is not None:
            result["throughput"] = self.throughput.render("objects/ms")
        else:
            result["throughput"] = {"throughput": _format(self.throughput_rate, "objects/ms")}
        if self.object_size is not None:
            result["objectSize"] = self.object_size.render("bytes", percentile_fmt="{:.0f}")
        return result


@dataclass
class ObjectCount:
    """Compressed/uncompressed tally of objects fetched from one backend."""

    compressed: int = 0
    uncompressed: int = 0

    def add(self, is_compressed: bool) -> None:
        if is_compressed:
            self.compressed += 1
        else:
            self.uncompressed += 1

    def to_dict(self) -> Dict[str, str]:
        return {
            "compressed": str(self.compressed),
            "uncompressed": str(self.uncompressed),
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Content digests of one object as served by each backend.

    The origin digest is None when the origin fetch was skipped. Equality is
    left to the caller.
    """

    bucket: str
    key: str
    accelerator_digest: str
    origin_digest: Optional[str] = None

    @property
    def matches(self) -> Optional[bool]:
        if self.origin_digest is None:
            return None
        return self.origin_digest == self.accelerator_digest

    def to_dict(self) -> Dict[str, str]:
        result = {"accelerator_md5": self.accelerator_digest}
        if self.origin_digest is not None:
            result["origin_md5"] = self.origin_digest
        return result


ReportEntry = Union[PerfStats, Dict[str, ObjectCount]]

OBJECT_COUNT_GROUP = "object_count"


@dataclass
class Report:
    """Statistic groups keyed by name, e.g. "origin_get_obj_perf_stats"."""

    groups: Dict[str, ReportEntry] = field(default_factory=dict)

    def add_stats(self, name: str, stats: PerfStats) -> None:
        self._claim(name)
        self.groups[name] = stats

    def add_counts(self, counts: Dict[str, ObjectCount]) -> None:
        self._claim(OBJECT_COUNT_GROUP)
        self.groups[OBJECT_COUNT_GROUP] = dict(counts)

    def merge(self, other: "Report") -> "Report":
        """Add all groups of another report; group names must be disjoint."""
        for name, entry in other.groups.items():
            self._claim(name)
            self.groups[name] = entry
        return self

    def _claim(self, name: str) -> None:
        if name in self.groups:
            raise ValueError(f"Report already contains statistic group '{name}'")

    def __contains__(self, name: str) -> bool:
        return name in self.groups

    def __getitem__(self, name: str) -> ReportEntry:
        return self.groups[name]

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for name, entry in self.groups.items():
            if isinstance(entry, PerfStats):
                result[name] = entry.to_dict()
            else:
                result[name] = {count_name: count.to_dict() for count_name, count in entry.items()}
        return result
