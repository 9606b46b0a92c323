"""
Async object store clients used by the benchmark engine.

ObjectStoreClient is the capability the engine depends on. ObjectStorageSystem
implements it on top of an aioboto3 S3 client; origin and accelerator
subclasses only differ in endpoint and credentials.
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import aioboto3
from aiohttp import ClientError as AiohttpClientError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from common.errors import BackendError, TransportError
from common.operations import Backend
from configuration import (
    CONNECT_TIMEOUT_SECONDS,
    MAX_ATTEMPTS,
    MAX_POOL_CONNECTIONS,
    READ_CHUNK_SIZE,
    READ_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

# Failures below the object store protocol: connection, timeout, payload framing
TRANSPORT_EXCEPTIONS = (BotoCoreError, AiohttpClientError, asyncio.TimeoutError)


class ObjectResponse:
    """Streaming body of a get plus the metadata returned with it."""

    def __init__(self, body, content_encoding: Optional[str] = None,
                 content_length: int = 0, key: str = ""):
        self.body = body
        self.content_encoding = content_encoding
        self.content_length = content_length
        self.key = key
        self.bytes_read = 0

    async def read(self, amt: Optional[int] = None) -> bytes:
        """Read up to amt bytes, or the rest of the body when amt is None."""
        try:
            data = await (self.body.read() if amt is None else self.body.read(amt))
        except TRANSPORT_EXCEPTIONS as e:
            raise TransportError(f"Failed reading body of {self.key}: {e}") from e
        self.bytes_read += len(data)
        return data

    async def drain(self, chunk_size: int = READ_CHUNK_SIZE) -> int:
        """Read and discard the body until EOF; returns the number of bytes read."""
        total = 0
        while True:
            chunk = await self.read(chunk_size)
            if not chunk:
                break
            total += len(chunk)
        return total

    def close(self) -> None:
        self.body.close()


class ObjectPayload:
    """Fully read object."""

    def __init__(self, data: bytes, content_encoding: Optional[str], content_length: int):
        self.data = data
        self.content_encoding = content_encoding
        self.content_length = content_length


class ObjectStoreClient:
    """Object store verbs the benchmark engine issues against one backend."""

    backend: Backend = None

    async def get_object(self, bucket: str, key: str) -> ObjectResponse:
        raise NotImplementedError

    async def head_object(self, bucket: str, key: str) -> Dict[str, Any]:
        raise NotImplementedError

    async def put_object(self, bucket: str, key: str, data: bytes) -> None:
        raise NotImplementedError

    async def delete_object(self, bucket: str, key: str) -> None:
        raise NotImplementedError

    async def list_objects(self, bucket: str, max_keys: int) -> List[str]:
        raise NotImplementedError

    async def read_object(self, bucket: str, key: str) -> ObjectPayload:
        """Get an object and read its whole body."""
        response = await self.get_object(bucket, key)
        try:
            data = await response.read()
        finally:
            response.close()
        return ObjectPayload(data, response.content_encoding, response.content_length)

    @property
    def name(self) -> str:
        return self.backend.value if self.backend else type(self).__name__


class ObjectStorageSystem(ObjectStoreClient):
    """aioboto3 backed object store client, used as an async context manager."""

    def __init__(self, backend: Backend, endpoint: str, credentials: dict):
        self.backend = backend
        self.endpoint = endpoint
        self.credentials = credentials

        self._config = self._create_config()

        self.session = aioboto3.Session(
            aws_access_key_id=credentials.get("access_key_id") or None,
            aws_secret_access_key=credentials.get("secret_access_key") or None,
            region_name=credentials.get("region_name"),
        )

        self.client = None
        self._client_context = None

        logger.info(f"Initialized {backend.value} storage for {endpoint or 'default endpoint'}")

    def _create_config(self) -> Config:
        """Create the botocore config; retries are disabled so each sample is one call."""
        return Config(
            max_pool_connections=MAX_POOL_CONNECTIONS,
            connect_timeout=CONNECT_TIMEOUT_SECONDS,
            read_timeout=READ_TIMEOUT_SECONDS,
            retries={
                "total_max_attempts": MAX_ATTEMPTS,
                "mode": "standard",
            },
            s3={"addressing_style": "path"},
            tcp_keepalive=True,
        )

    async def __aenter__(self):
        self._client_context = self.session.client(
            "s3",
            endpoint_url=self.endpoint or None,
            config=self._config,
        )
        self.client = await self._client_context.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client_context:
            await self._client_context.__aexit__(exc_type, exc_val, exc_tb)
        self.client = None
        self._client_context = None

    def _require_client(self):
        if not self.client:
            raise RuntimeError(
                f"{self.backend.value} client not initialized. Use async context manager."
            )
        return self.client

    @contextmanager
    def _translate_errors(self, operation: str, key: str = ""):
        """Map botocore/aiohttp failures onto BackendError and TransportError."""
        try:
            yield
        except ClientError as e:
            error = e.response.get("Error", {})
            code = error.get("Code", "Unknown")
            message = error.get("Message") or str(e)
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
            logger.error(
                f"{self.backend.value} error {code} (HTTP {status}) during {operation} {key}"
            )
            raise BackendError(code, message, backend=self.backend.value) from e
        except TRANSPORT_EXCEPTIONS as e:
            logger.error(f"{self.backend.value} transport failure during {operation} {key}: {e}")
            raise TransportError(f"{self.backend.value} {operation} failed: {e}") from e

    async def get_object(self, bucket: str, key: str) -> ObjectResponse:
        client = self._require_client()
        with self._translate_errors("get_object", key):
            response = await client.get_object(Bucket=bucket, Key=key)
        return ObjectResponse(
            response["Body"],
            content_encoding=response.get("ContentEncoding"),
            content_length=response.get("ContentLength", 0),
            key=key,
        )

    async def head_object(self, bucket: str, key: str) -> Dict[str, Any]:
        client = self._require_client()
        with self._translate_errors("head_object", key):
            response = await client.head_object(Bucket=bucket, Key=key)
        last_modified = response.get("LastModified")
        return {
            "Expiration": response.get("Expiration"),
            "LastModified": last_modified.isoformat() if last_modified else None,
            "ContentLength": response.get("ContentLength"),
            "ContentEncoding": response.get("ContentEncoding"),
            "ETag": response.get("ETag"),
            "VersionId": response.get("VersionId"),
            "StorageClass": response.get("StorageClass", ""),
        }

    async def put_object(self, bucket: str, key: str, data: bytes) -> None:
        client = self._require_client()
        with self._translate_errors("put_object", key):
            await client.put_object(Bucket=bucket, Key=key, Body=data)

    async def delete_object(self, bucket: str, key: str) -> None:
        client = self._require_client()
        with self._translate_errors("delete_object", key):
            await client.delete_object(Bucket=bucket, Key=key)

    async def list_objects(self, bucket: str, max_keys: int) -> List[str]:
        client = self._require_client()
        with self._translate_errors("list_objects_v2"):
            response = await client.list_objects_v2(Bucket=bucket, MaxKeys=max_keys)
        return [obj["Key"] for obj in response.get("Contents", [])]
