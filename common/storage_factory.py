"""
Factory module for creating object store clients.
"""

import logging

# Suppress boto3/botocore logging before importing any boto3-related modules
logging.getLogger('botocore').setLevel(logging.CRITICAL)
logging.getLogger('botocore.credentials').setLevel(logging.CRITICAL)
logging.getLogger('boto3').setLevel(logging.CRITICAL)
logging.getLogger('aioboto3').setLevel(logging.CRITICAL)
logging.getLogger('aiobotocore').setLevel(logging.CRITICAL)
logging.getLogger('urllib3').setLevel(logging.CRITICAL)

from common.operations import Backend
from systems.accelerator import AcceleratorSystem
from systems.origin import OriginSystem
from configuration import (
    ACCELERATOR_ACCESS_KEY_ID,
    ACCELERATOR_REGION,
    ACCELERATOR_SECRET_ACCESS_KEY,
    ORIGIN_ACCESS_KEY_ID,
    ORIGIN_REGION,
    ORIGIN_SECRET_ACCESS_KEY,
)

logger = logging.getLogger(__name__)


def create_storage_system(backend: Backend):
    """Create and return the client for a backend.

    Args:
        backend: Backend.ORIGIN or Backend.ACCELERATOR

    Returns:
        Storage system instance (OriginSystem or AcceleratorSystem)

    Raises:
        ValueError: If backend is not supported
    """
    if backend is Backend.ORIGIN:
        credentials = {
            "access_key_id": ORIGIN_ACCESS_KEY_ID,
            "secret_access_key": ORIGIN_SECRET_ACCESS_KEY,
            "region_name": ORIGIN_REGION,
        }
        return OriginSystem(credentials)

    elif backend is Backend.ACCELERATOR:
        credentials = {
            "access_key_id": ACCELERATOR_ACCESS_KEY_ID,
            "secret_access_key": ACCELERATOR_SECRET_ACCESS_KEY,
            "region_name": ACCELERATOR_REGION,
        }
        return AcceleratorSystem(credentials)

    else:
        raise ValueError(f"Unsupported backend: {backend}. Must be origin or accelerator.")
