"""
Single-object operations against one selected backend.
"""

import logging
from typing import Any, Dict, List

from algorithms.digest import normalize
from configuration import DEFAULT_NUM_KEYS, MAX_KEYS
from systems.base import ObjectStoreClient

logger = logging.getLogger(__name__)


async def head_object(client: ObjectStoreClient, bucket: str, key: str) -> Dict[str, Any]:
    """Object metadata as reported by the backend."""
    metadata = await client.head_object(bucket, key)
    logger.info(f"Head {bucket}/{key} on {client.name}: {metadata.get('ContentLength')} bytes")
    return metadata


async def object_md5(client: ObjectStoreClient, bucket: str, key: str) -> Dict[str, str]:
    """MD5 of the raw bytes served for one object, without gzip handling."""
    payload = await client.read_object(bucket, key)
    return {"md5": normalize(payload.data, None, "")}


async def list_object_keys(client: ObjectStoreClient, bucket: str,
                           num_keys: int = DEFAULT_NUM_KEYS) -> Dict[str, List[str]]:
    keys = await client.list_objects(bucket, min(num_keys, MAX_KEYS))
    return {"objects": keys}
