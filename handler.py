"""
Invocation surface: parses a request event, runs the operation against the
origin and accelerator clients and returns a JSON-serializable response.

Example events:
  {"operation": "list", "bucket": "<bucket>"}
  {"operation": "get_ttfb", "bucket": "<bucket>", "numKeys": "100"}
  {"operation": "get_passthrough", "bucket": "<unmonitored-bucket>"}
  {"operation": "put", "bucket": "<bucket>", "numKeys": "5", "objectLength": "10"}
  {"operation": "all", "bucket": "<bucket>", "backend": "accelerator"}
  {"operation": "compare", "bucket": "<bucket>", "key": "data.gz", "bucketClean": "ON"}
"""

import logging
from contextlib import AsyncExitStack
from typing import Any, Callable, Dict, Mapping, Optional

import uvloop

from algorithms import object_ops
from algorithms.composite import CompositeRunner
from algorithms.validator import ContentValidator
from algorithms.workloads import WorkloadRunner, generate_keys
from common.errors import BackendError, BenchError, InvalidRequest, TransportError
from common.operations import Backend, Operation
from common.storage_factory import create_storage_system
from configuration import (
    DEFAULT_NUM_KEYS,
    DEFAULT_OBJECT_LENGTH,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_KEYS,
)
from systems.base import ObjectStoreClient

# Set up logging (only if not already configured)
if not logging.root.handlers:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

TRUE_FLAGS = ("on", "true", "yes", "1")
FALSE_FLAGS = ("off", "false", "no", "0", "")


def _parse_int(event: Mapping, name: str, default: int, minimum: int) -> int:
    value = event.get(name)
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return default
    if isinstance(value, bool):
        raise InvalidRequest(f"{name} must be an integer, got {value!r}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"{name} must be an integer, got {value!r}")
    if parsed < minimum:
        raise InvalidRequest(f"{name} must be at least {minimum}, got {parsed}")
    return parsed


def _parse_flag(event: Mapping, name: str) -> bool:
    value = event.get(name)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_FLAGS:
        return True
    if text in FALSE_FLAGS:
        return False
    raise InvalidRequest(f"{name} must be ON or OFF, got {value!r}")


class BenchmarkRequest:
    """A validated request event."""

    def __init__(self, operation: Operation, bucket: str, key: Optional[str] = None,
                 num_keys: int = DEFAULT_NUM_KEYS, object_length: int = DEFAULT_OBJECT_LENGTH,
                 backend: Optional[Backend] = None, bucket_clean: bool = False):
        self.operation = operation
        self.bucket = bucket
        self.key = key
        self.num_keys = num_keys
        self.object_length = object_length
        self.backend = backend
        self.bucket_clean = bucket_clean

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "BenchmarkRequest":
        """Parse and validate an event before any backend call is made.

        Raises:
            InvalidRequest: Missing or unparseable field, or unknown operation
        """
        if not isinstance(event, Mapping):
            raise InvalidRequest(f"Request must be a mapping, got {type(event).__name__}")

        operation = Operation.parse(event.get("operation", event.get("requestType")))

        bucket = event.get("bucket")
        if not bucket:
            raise InvalidRequest("bucket is required")

        key = event.get("key") or None
        if operation.needs_key and not key:
            raise InvalidRequest(f"key is required for {operation.value}")

        num_keys = min(_parse_int(event, "numKeys", DEFAULT_NUM_KEYS, minimum=1), MAX_KEYS)
        object_length = _parse_int(event, "objectLength", DEFAULT_OBJECT_LENGTH, minimum=0)

        backend = Backend.parse(event.get("backend", event.get("sdkType")))
        if operation.passthrough and backend is Backend.ORIGIN:
            raise InvalidRequest(f"{operation.value} runs against the accelerator only")

        return cls(
            operation=operation,
            bucket=str(bucket),
            key=key,
            num_keys=num_keys,
            object_length=object_length,
            backend=backend,
            bucket_clean=_parse_flag(event, "bucketClean"),
        )


class BenchmarkEngine:
    """Runs requests against two already-configured object store clients."""

    def __init__(self, origin: ObjectStoreClient, accelerator: ObjectStoreClient,
                 clock: Optional[Callable[[], float]] = None):
        self.origin = origin
        self.accelerator = accelerator
        self.runner = WorkloadRunner(origin, accelerator, clock=clock)
        self.composite = CompositeRunner(self.runner)
        self.validator = ContentValidator(origin, accelerator)

        self._handlers = {
            Operation.LIST: self._run_list,
            Operation.PUT: self._run_put,
            Operation.DELETE: self._run_delete,
            Operation.GET: self._run_get,
            Operation.GET_TTFB: self._run_get,
            Operation.GET_PASSTHROUGH: self._run_get,
            Operation.GET_PASSTHROUGH_TTFB: self._run_get,
            Operation.ALL: self._run_all,
            Operation.VALIDATE_MD5: self._run_validate,
            Operation.COMPARE: self._run_validate,
            Operation.HEAD: self._run_head,
            Operation.GET_MD5: self._run_get_md5,
            Operation.LIST_OBJECTS: self._run_list_objects,
        }
        missing = set(Operation) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for operations: {sorted(op.value for op in missing)}")

    def _single_client(self, request: BenchmarkRequest) -> ObjectStoreClient:
        """Single-object operations default to the accelerator."""
        return self.origin if request.backend is Backend.ORIGIN else self.accelerator

    async def execute(self, request: BenchmarkRequest) -> Dict[str, Any]:
        """Run a request; backend and transport failures become the response."""
        logger.info(f"=== {request.operation.value} on {request.bucket} ===")
        try:
            return await self._handlers[request.operation](request)
        except BenchError as e:
            logger.error(f"{request.operation.value} failed: {e}")
            return e.to_dict()

    async def _run_list(self, request: BenchmarkRequest) -> Dict[str, Any]:
        report = await self.runner.run_list(request.bucket, self.runner.targets(request.backend))
        return report.to_dict()

    async def _run_put(self, request: BenchmarkRequest) -> Dict[str, Any]:
        report = await self.runner.run_put(
            request.bucket,
            generate_keys(request.num_keys),
            self.runner.targets(request.backend),
            request.object_length,
        )
        return report.to_dict()

    async def _run_delete(self, request: BenchmarkRequest) -> Dict[str, Any]:
        report = await self.runner.run_delete(
            request.bucket,
            generate_keys(request.num_keys),
            self.runner.targets(request.backend),
        )
        return report.to_dict()

    async def _run_get(self, request: BenchmarkRequest) -> Dict[str, Any]:
        keys = await self.runner.discover_keys(request.bucket, request.num_keys)
        report = await self.runner.run_get(
            request.bucket,
            keys,
            self.runner.targets(request.backend),
            first_byte_only=request.operation.first_byte_only,
            passthrough=request.operation.passthrough,
        )
        return report.to_dict()

    async def _run_all(self, request: BenchmarkRequest) -> Dict[str, Any]:
        report = await self.composite.execute(
            request.bucket,
            num_keys=request.num_keys,
            object_length=request.object_length,
            backend=request.backend,
        )
        return report.to_dict()

    async def _run_validate(self, request: BenchmarkRequest) -> Dict[str, Any]:
        include_origin = request.operation is Operation.VALIDATE_MD5 or not request.bucket_clean
        result = await self.validator.compare(request.bucket, request.key, include_origin)
        return result if isinstance(result, dict) else result.to_dict()

    async def _run_head(self, request: BenchmarkRequest) -> Dict[str, Any]:
        return await object_ops.head_object(self._single_client(request), request.bucket, request.key)

    async def _run_get_md5(self, request: BenchmarkRequest) -> Dict[str, Any]:
        return await object_ops.object_md5(self._single_client(request), request.bucket, request.key)

    async def _run_list_objects(self, request: BenchmarkRequest) -> Dict[str, Any]:
        return await object_ops.list_object_keys(
            self._single_client(request), request.bucket, request.num_keys
        )


async def handle_request(event: Mapping[str, Any], origin: Optional[ObjectStoreClient] = None,
                         accelerator: Optional[ObjectStoreClient] = None,
                         clock: Optional[Callable[[], float]] = None) -> Dict[str, Any]:
    """Parse, run and answer one request; never raises.

    Clients that are not supplied are created from configuration for this
    invocation only and closed before returning.
    """
    try:
        request = BenchmarkRequest.from_event(event)
    except InvalidRequest as e:
        logger.error(f"Invalid request: {e}")
        return e.to_dict()

    try:
        async with AsyncExitStack() as stack:
            if origin is None:
                origin = await stack.enter_async_context(create_storage_system(Backend.ORIGIN))
            if accelerator is None:
                accelerator = await stack.enter_async_context(
                    create_storage_system(Backend.ACCELERATOR)
                )

            engine = BenchmarkEngine(origin, accelerator, clock=clock)
            return await engine.execute(request)

    except (BackendError, TransportError) as e:
        logger.error(f"Request failed: {e}")
        return e.to_dict()
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return {"errorMessage": str(e), "errorType": type(e).__name__}


def lambda_handler(event, context=None):
    """AWS Lambda entry point."""
    return uvloop.run(handle_request(event))
