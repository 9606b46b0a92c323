"""
Error taxonomy for the accelerator benchmark.
"""

from typing import Any, Dict, Optional


class BenchError(Exception):
    """Base class for errors reported in a response payload."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errorMessage": self.message,
            "errorType": type(self).__name__,
        }


class BackendError(BenchError):
    """The object store rejected or failed a call."""

    def __init__(self, code: Optional[str], message: str, backend: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.backend = backend

    def __str__(self):
        prefix = f"{self.backend}: " if self.backend else ""
        return f"{prefix}{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.code:
            result["errorCode"] = self.code
        return result


class DecodeError(BenchError):
    """Gzip framing was indicated but the payload could not be decompressed."""


class TransportError(BenchError):
    """Connectivity or serialization failure below the object store protocol."""


class InvalidRequest(BenchError):
    """A request field is missing, unparseable or names an unknown operation."""
