"""
Timed list, put, delete and get workloads against origin and/or accelerator.
"""

import logging
import secrets
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from algorithms.digest import is_compressed
from common.operations import ALL_BACKENDS, Backend
from configuration import (
    DEFAULT_NUM_KEYS,
    DEFAULT_OBJECT_LENGTH,
    LIST_ITERATIONS,
    LIST_MAX_KEYS,
    MAX_KEYS,
    PAYLOAD_ALPHABET,
    PERF_KEY_PREFIX,
    READ_CHUNK_SIZE,
)
from persistence.base import SampleCollector, collect_counts
from persistence.record import Sample
from persistence.report import Report
from systems.base import ObjectStoreClient

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


def generate_keys(num_keys: int = DEFAULT_NUM_KEYS) -> List[str]:
    """Synthetic key names for put/delete workloads."""
    return [f"{PERF_KEY_PREFIX}{i}" for i in range(min(num_keys, MAX_KEYS))]


def generate_payload(length: int = DEFAULT_OBJECT_LENGTH) -> bytes:
    """Random alphanumeric payload of the given length."""
    return "".join(secrets.choice(PAYLOAD_ALPHABET) for _ in range(length)).encode("ascii")


class WorkloadRunner:
    """Runs one operation family sequentially and reduces its samples.

    Every call is awaited to completion before the next one starts. A failed
    call propagates immediately and abandons the rest of the workload.
    """

    def __init__(self, origin: ObjectStoreClient, accelerator: ObjectStoreClient,
                 clock: Optional[Callable[[], float]] = None):
        self.clients: Dict[Backend, ObjectStoreClient] = {
            Backend.ORIGIN: origin,
            Backend.ACCELERATOR: accelerator,
        }
        self.clock = clock or monotonic_ms

    @staticmethod
    def targets(backend: Optional[Backend] = None) -> Tuple[Backend, ...]:
        """Backends to run against: the selected one, or both."""
        return ALL_BACKENDS if backend is None else (backend,)

    async def discover_keys(self, bucket: str, num_keys: int = DEFAULT_NUM_KEYS) -> List[str]:
        """Keys currently in the bucket, from one origin listing."""
        keys = await self.clients[Backend.ORIGIN].list_objects(bucket, min(num_keys, MAX_KEYS))
        logger.info(f"Discovered {len(keys)} keys in {bucket}")
        return keys

    async def run_list(self, bucket: str, backends: Sequence[Backend] = ALL_BACKENDS) -> Report:
        """List up to LIST_MAX_KEYS objects LIST_ITERATIONS times per backend."""
        report = Report()
        for backend in backends:
            client = self.clients[backend]
            collector = SampleCollector(backend, "list_objects")
            logger.info(f"Listing {bucket} on {backend.value} {LIST_ITERATIONS} times")

            for _ in range(LIST_ITERATIONS):
                start = self.clock()
                keys = await client.list_objects(bucket, LIST_MAX_KEYS)
                duration = self.clock() - start
                collector.add_record(
                    Sample(backend, "list_objects", duration, object_count=len(keys))
                )

            report.add_stats(
                f"{backend.value}_list_objects_perf_stats",
                collector.get_summary(per_call_throughput=True),
            )
        return report

    async def run_put(self, bucket: str, keys: Sequence[str],
                      backends: Sequence[Backend] = ALL_BACKENDS,
                      object_length: int = DEFAULT_OBJECT_LENGTH) -> Report:
        """Upload one random payload per key to each backend."""
        payloads = {key: generate_payload(object_length) for key in keys}

        report = Report()
        for backend in backends:
            client = self.clients[backend]
            collector = SampleCollector(backend, "put_object")
            logger.info(f"Putting {len(keys)} objects of {object_length} bytes to {backend.value}")

            for key in keys:
                data = payloads[key]
                start = self.clock()
                await client.put_object(bucket, key, data)
                duration = self.clock() - start
                collector.add_record(Sample(backend, "put_object", duration, key=key))

            report.add_stats(f"{backend.value}_put_obj_perf_stats", collector.get_summary())
        return report

    async def run_delete(self, bucket: str, keys: Sequence[str],
                         backends: Sequence[Backend] = ALL_BACKENDS) -> Report:
        """Delete every key from each backend."""
        report = Report()
        for backend in backends:
            client = self.clients[backend]
            collector = SampleCollector(backend, "delete_object")
            logger.info(f"Deleting {len(keys)} objects from {backend.value}")

            for key in keys:
                start = self.clock()
                await client.delete_object(bucket, key)
                duration = self.clock() - start
                collector.add_record(Sample(backend, "delete_object", duration, key=key))

            report.add_stats(f"{backend.value}_del_obj_perf_stats", collector.get_summary())
        return report

    async def run_get(self, bucket: str, keys: Sequence[str],
                      backends: Sequence[Backend] = ALL_BACKENDS,
                      first_byte_only: bool = False, passthrough: bool = False) -> Report:
        """Fetch every key from each backend, reading one byte or the full body.

        Passthrough runs go to the accelerator only and report under the
        "_pt" group names.
        """
        if passthrough:
            backends = (Backend.ACCELERATOR,)

        group = "get_obj_pt" if passthrough else "get_obj"
        if first_byte_only:
            group += "_ttfb"

        report = Report()
        collectors = []
        for backend in backends:
            client = self.clients[backend]
            collector = SampleCollector(backend, group)
            collectors.append(collector)
            mode = "first byte" if first_byte_only else "full body"
            logger.info(f"Getting {len(keys)} objects from {backend.value} ({mode})")

            for key in keys:
                start = self.clock()
                response = await client.get_object(bucket, key)
                try:
                    if first_byte_only:
                        await response.read(1)
                    else:
                        await response.drain(READ_CHUNK_SIZE)
                    duration = self.clock() - start
                finally:
                    response.close()

                collector.add_record(Sample(
                    backend, group, duration,
                    object_size=response.content_length,
                    compressed=is_compressed(response.content_encoding, key),
                    key=key,
                ))

            report.add_stats(
                f"{backend.value}_{group}_perf_stats",
                collector.get_summary(track_sizes=True),
            )

        report.add_counts(collect_counts(collectors))
        return report
