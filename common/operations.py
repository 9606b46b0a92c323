"""
Backend targets and operation names accepted by the request handler.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from common.errors import InvalidRequest


# sdkType values of the earlier handlers
LEGACY_BACKENDS: Dict[str, str] = {"s3": "origin", "bolt": "accelerator"}


class Backend(Enum):
    """Object store a call is issued against."""

    ORIGIN = "origin"
    ACCELERATOR = "accelerator"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Backend"]:
        """Parse a backend selector; empty means no selection."""
        if value is None or str(value).strip() == "":
            return None
        text = str(value).strip().lower()
        if text in LEGACY_BACKENDS:
            return cls(LEGACY_BACKENDS[text])
        try:
            return cls(text)
        except ValueError:
            choices = ", ".join(b.value for b in cls)
            raise InvalidRequest(f"Unknown backend '{value}', expected one of: {choices}")


# Run order when both backends are targeted
ALL_BACKENDS: Tuple[Backend, ...] = (Backend.ORIGIN, Backend.ACCELERATOR)


class Operation(Enum):
    """Every operation the handler can dispatch."""

    LIST = "list"
    PUT = "put"
    DELETE = "delete"
    GET = "get"
    GET_TTFB = "get_ttfb"
    GET_PASSTHROUGH = "get_passthrough"
    GET_PASSTHROUGH_TTFB = "get_passthrough_ttfb"
    ALL = "all"
    VALIDATE_MD5 = "validate_md5"
    COMPARE = "compare"
    HEAD = "head"
    GET_MD5 = "get_md5"
    LIST_OBJECTS = "list_objects"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Operation":
        """Parse an operation name; empty means the composite benchmark.

        Upper-case request type names of the earlier handlers (GET_OBJECT,
        LIST_OBJECTS_V2, VALIDATE_OBJECT_MD5, ...) are accepted as well.
        """
        if value is None or str(value).strip() == "":
            return cls.ALL
        text = str(value).strip()
        if text.upper() in LEGACY_OPERATIONS:
            return LEGACY_OPERATIONS[text.upper()]
        try:
            return cls(text.lower())
        except ValueError:
            raise InvalidRequest(f"Unknown operation '{value}'")

    @property
    def needs_key(self) -> bool:
        return self in KEYED_OPERATIONS

    @property
    def first_byte_only(self) -> bool:
        return self in (Operation.GET_TTFB, Operation.GET_PASSTHROUGH_TTFB)

    @property
    def passthrough(self) -> bool:
        return self in (Operation.GET_PASSTHROUGH, Operation.GET_PASSTHROUGH_TTFB)


KEYED_OPERATIONS: FrozenSet[Operation] = frozenset({
    Operation.VALIDATE_MD5,
    Operation.COMPARE,
    Operation.HEAD,
    Operation.GET_MD5,
})

# Request type names used by the earlier benchmark and object-ops handlers
LEGACY_OPERATIONS: Dict[str, Operation] = {
    "LIST_OBJECTS_V2": Operation.LIST,
    "PUT_OBJECT": Operation.PUT,
    "DELETE_OBJECT": Operation.DELETE,
    "GET_OBJECT": Operation.GET,
    "GET_OBJECT_TTFB": Operation.GET_TTFB,
    "GET_OBJECT_PASSTHROUGH": Operation.GET_PASSTHROUGH,
    "GET_OBJECT_PASSTHROUGH_TTFB": Operation.GET_PASSTHROUGH_TTFB,
    "HEAD_OBJECT": Operation.HEAD,
    "VALIDATE_OBJECT_MD5": Operation.VALIDATE_MD5,
}
