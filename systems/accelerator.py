"""
Caching accelerator object store, placed in front of the origin.
"""

from systems.base import ObjectStorageSystem
from common.operations import Backend
from configuration import ACCELERATOR_ENDPOINT
import logging

logger = logging.getLogger(__name__)


class AcceleratorSystem(ObjectStorageSystem):
    """Access to objects through the caching accelerator."""

    def __init__(self, credentials: dict = None, endpoint: str = None):
        if credentials is None:
            credentials = {}

        super().__init__(
            backend=Backend.ACCELERATOR,
            endpoint=ACCELERATOR_ENDPOINT if endpoint is None else endpoint,
            credentials=credentials,
        )
        logger.info("Initialized accelerator system")
