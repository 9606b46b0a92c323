"""
Content digests of object payloads, with gzip framing reversed when indicated.
"""

import gzip
import hashlib
import io
import logging
import zlib
from typing import Optional

from common.errors import DecodeError
from configuration import GZIP_ENCODING, GZIP_SUFFIX, READ_CHUNK_SIZE

logger = logging.getLogger(__name__)


def is_compressed(content_encoding: Optional[str], key: str) -> bool:
    """True when the encoding hint says gzip (any case) or the key ends in .gz."""
    if content_encoding is not None and content_encoding.strip().lower() == GZIP_ENCODING:
        return True
    return key.endswith(GZIP_SUFFIX)


def normalize(data: bytes, content_encoding: Optional[str], key: str) -> str:
    """
    Compute the canonical MD5 of an object payload as uppercase hex.

    Gzip payloads are decompressed before hashing so that objects stored
    compressed compare by content. MD5 is used for change detection only.

    Args:
        data: Raw payload as returned by a backend
        content_encoding: Content-Encoding hint, may be None
        key: Object key, consulted for the .gz suffix

    Returns:
        Uppercase hexadecimal MD5

    Raises:
        DecodeError: Gzip was indicated but the payload is not valid gzip
    """
    md5 = hashlib.md5(usedforsecurity=False)

    if not is_compressed(content_encoding, key):
        md5.update(data)
        return md5.hexdigest().upper()

    if not data:
        logger.error(f"Empty payload for {key} where gzip was indicated")
        raise DecodeError(f"Malformed gzip payload for {key}: no gzip header")

    try:
        with gzip.GzipFile(fileobj=io.BytesIO(data), mode="rb") as stream:
            while True:
                chunk = stream.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                md5.update(chunk)
    except (OSError, EOFError, zlib.error) as e:
        logger.error(f"Failed to decompress {key} ({len(data)} bytes): {e}")
        raise DecodeError(f"Malformed gzip payload for {key}: {e}") from e

    return md5.hexdigest().upper()
