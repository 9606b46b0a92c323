"""
Origin object store: the authoritative copy behind the accelerator.
"""

from systems.base import ObjectStorageSystem
from common.operations import Backend
from configuration import ORIGIN_ENDPOINT
import logging

logger = logging.getLogger(__name__)


class OriginSystem(ObjectStorageSystem):
    """Direct access to the origin object store."""

    def __init__(self, credentials: dict = None, endpoint: str = None):
        if credentials is None:
            credentials = {}

        super().__init__(
            backend=Backend.ORIGIN,
            endpoint=ORIGIN_ENDPOINT if endpoint is None else endpoint,
            credentials=credentials,
        )
        logger.info("Initialized origin system")
