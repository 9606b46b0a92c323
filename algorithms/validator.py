"""
Content equivalence checks: the same object fetched from origin and accelerator.
"""

import logging
from typing import Any, Dict, Union

from algorithms.digest import normalize
from common.errors import BackendError, DecodeError, TransportError
from persistence.report import ComparisonResult
from systems.base import ObjectStoreClient

logger = logging.getLogger(__name__)


class ContentValidator:
    """Fetches one object from both backends and reports both digests.

    The validator reports, it does not judge: a mismatch is returned to the
    caller like any other result, and fetch failures come back as error
    payloads so one bad object does not stop a batch of checks.
    """

    def __init__(self, origin: ObjectStoreClient, accelerator: ObjectStoreClient):
        self.origin = origin
        self.accelerator = accelerator

    async def compare(self, bucket: str, key: str,
                      include_origin: bool = True) -> Union[ComparisonResult, Dict[str, Any]]:
        """Digest an object as served by the accelerator and, optionally, the origin.

        The origin's Content-Encoding decides gzip handling for both payloads.
        When the origin fetch is skipped the accelerator's hint is used.

        Args:
            bucket: Bucket name
            key: Object key
            include_origin: False when the origin copy is known to be gone

        Returns:
            ComparisonResult, or an error payload with errorMessage/errorType
            (and errorCode for backend errors)
        """
        try:
            accelerator_payload = await self.accelerator.read_object(bucket, key)
            origin_payload = None
            if include_origin:
                origin_payload = await self.origin.read_object(bucket, key)

            encoding_source = origin_payload or accelerator_payload
            encoding = encoding_source.content_encoding

            origin_digest = None
            if origin_payload is not None:
                origin_digest = normalize(origin_payload.data, encoding, key)
            accelerator_digest = normalize(accelerator_payload.data, encoding, key)

        except (BackendError, TransportError, DecodeError) as e:
            logger.warning(f"Comparison of {bucket}/{key} failed: {e}")
            return e.to_dict()

        result = ComparisonResult(
            bucket=bucket,
            key=key,
            accelerator_digest=accelerator_digest,
            origin_digest=origin_digest,
        )
        if result.matches is False:
            logger.warning(
                f"Digest mismatch for {bucket}/{key}: origin {origin_digest}, "
                f"accelerator {accelerator_digest}"
            )
        else:
            logger.info(f"Compared {bucket}/{key}: accelerator {accelerator_digest}")
        return result
