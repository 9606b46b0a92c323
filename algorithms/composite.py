"""
Put, delete, list and get phases combined into one report.
"""

import logging
from typing import Optional

from algorithms.workloads import WorkloadRunner, generate_keys
from common.operations import Backend
from configuration import DEFAULT_NUM_KEYS, DEFAULT_OBJECT_LENGTH
from persistence.report import Report

logger = logging.getLogger(__name__)


class CompositeRunner:
    """Sequences the four workloads; any phase error aborts the rest."""

    def __init__(self, runner: WorkloadRunner):
        self.runner = runner

    async def execute(self, bucket: str, num_keys: int = DEFAULT_NUM_KEYS,
                      object_length: int = DEFAULT_OBJECT_LENGTH,
                      backend: Optional[Backend] = None) -> Report:
        backends = self.runner.targets(backend)
        keys = generate_keys(num_keys)

        logger.info("=== Phase 1: Put ===")
        report = await self.runner.run_put(bucket, keys, backends, object_length)

        logger.info("=== Phase 2: Delete ===")
        report.merge(await self.runner.run_delete(bucket, keys, backends))

        logger.info("=== Phase 3: List ===")
        report.merge(await self.runner.run_list(bucket, backends))

        # Discover after put/delete so gets measure whatever exists now
        logger.info("=== Phase 4: Get ===")
        existing_keys = await self.runner.discover_keys(bucket, num_keys)
        report.merge(await self.runner.run_get(bucket, existing_keys, backends))

        logger.info(f"Composite benchmark completed with {len(report.groups)} statistic groups")
        return report
