"""
Basic data structures for the accelerator benchmark.
"""

from typing import Optional

from common.operations import Backend


class Sample:
    """A single timed call against one backend."""

    def __init__(self, backend: Backend, operation: str, duration_ms: float,
                 object_count: Optional[int] = None, object_size: Optional[int] = None,
                 compressed: Optional[bool] = None, key: Optional[str] = None):
        self.backend = backend
        self.operation = operation
        self.duration_ms = duration_ms
        self.object_count = object_count  # Objects returned, list only
        self.object_size = object_size  # Content length, get only
        self.compressed = compressed  # Encoding classification, get only
        self.key = key

    def __repr__(self):
        return (
            f"Sample({self.backend.value}, {self.operation}, "
            f"{self.duration_ms:.3f} ms, key={self.key!r})"
        )
