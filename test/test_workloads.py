"""
Tests for the list, put, delete and get workloads.
"""

import gzip
import os
import sys
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.workloads import WorkloadRunner, generate_keys, generate_payload
from common.errors import BackendError
from common.operations import ALL_BACKENDS, Backend
from configuration import LIST_ITERATIONS, PAYLOAD_ALPHABET, PERF_KEY_PREFIX
from fakes import FakeClock, FakeObjectStore


class TestKeyGeneration(unittest.TestCase):
    """Synthetic keys and payloads."""

    def test_generate_keys(self):
        keys = generate_keys(3)
        self.assertEqual(keys, [f"{PERF_KEY_PREFIX}0", f"{PERF_KEY_PREFIX}1", f"{PERF_KEY_PREFIX}2"])

    def test_generate_keys_capped(self):
        self.assertEqual(len(generate_keys(5000)), 1000)

    def test_generate_payload(self):
        payload = generate_payload(100)
        self.assertIsInstance(payload, bytes)
        self.assertEqual(len(payload), 100)
        self.assertTrue(all(chr(b) in PAYLOAD_ALPHABET for b in payload))
        self.assertEqual(generate_payload(0), b"")


class WorkloadTestCase(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.origin = FakeObjectStore(Backend.ORIGIN, self.clock, latency_ms=2.0)
        self.accelerator = FakeObjectStore(Backend.ACCELERATOR, self.clock, latency_ms=2.0)
        self.runner = WorkloadRunner(self.origin, self.accelerator, clock=self.clock)


class TestTargets(unittest.TestCase):

    def test_targets(self):
        self.assertEqual(WorkloadRunner.targets(None), ALL_BACKENDS)
        self.assertEqual(WorkloadRunner.targets(Backend.ORIGIN), (Backend.ORIGIN,))
        self.assertEqual(WorkloadRunner.targets(Backend.ACCELERATOR), (Backend.ACCELERATOR,))


class TestListWorkload(WorkloadTestCase):

    async def test_list_ten_times_per_backend(self):
        for i in range(4):
            self.origin.add_object(f"k{i}", b"x")
            self.accelerator.add_object(f"k{i}", b"x")

        report = await self.runner.run_list("bucket")

        self.assertEqual(self.origin.calls["list_objects"], LIST_ITERATIONS)
        self.assertEqual(self.accelerator.calls["list_objects"], LIST_ITERATIONS)
        stats = report["origin_list_objects_perf_stats"]
        self.assertEqual(stats.sample_count, LIST_ITERATIONS)
        self.assertEqual(stats.latency.average, 2.0)
        # 4 objects in 2 ms
        self.assertEqual(stats.throughput.p50, 2.0)
        self.assertEqual(stats.throughput.p90, 2.0)
        self.assertIsNone(stats.throughput_rate)
        self.assertIn("accelerator_list_objects_perf_stats", report)

    async def test_list_single_backend(self):
        report = await self.runner.run_list("bucket", (Backend.ACCELERATOR,))
        self.assertEqual(self.origin.calls["list_objects"], 0)
        self.assertNotIn("origin_list_objects_perf_stats", report)


class TestPutDeleteWorkload(WorkloadTestCase):

    async def test_put_latency(self):
        """Five puts at 2 ms each on both backends."""
        report = await self.runner.run_put("bucket", generate_keys(5), object_length=10)

        for backend in ("origin", "accelerator"):
            stats = report[f"{backend}_put_obj_perf_stats"]
            self.assertEqual(stats.latency.average, 2.0)
            self.assertEqual(stats.latency.p50, 2.0)
            self.assertEqual(stats.latency.p90, 2.0)
            self.assertAlmostEqual(stats.throughput_rate, 0.5)
            self.assertIsNone(stats.object_size)
        self.assertEqual(self.origin.calls["put_object"], 5)
        self.assertEqual(len(self.accelerator.objects[f"{PERF_KEY_PREFIX}0"][0]), 10)

    async def test_same_payload_on_both_backends(self):
        await self.runner.run_put("bucket", generate_keys(3), object_length=20)
        for key in generate_keys(3):
            self.assertEqual(self.origin.objects[key], self.accelerator.objects[key])

    async def test_delete(self):
        keys = generate_keys(4)
        await self.runner.run_put("bucket", keys)
        report = await self.runner.run_delete("bucket", keys, (Backend.ORIGIN,))

        self.assertEqual(self.origin.objects, {})
        self.assertEqual(len(self.accelerator.objects), 4)
        self.assertEqual(report["origin_del_obj_perf_stats"].sample_count, 4)
        self.assertNotIn("accelerator_del_obj_perf_stats", report)

    async def test_failure_aborts_remaining_iterations(self):
        self.origin.fail_on = {"put_object": 3}

        with self.assertRaises(BackendError):
            await self.runner.run_put("bucket", generate_keys(10))

        self.assertEqual(self.origin.calls["put_object"], 3)
        self.assertEqual(self.accelerator.calls["put_object"], 0)


class TestGetWorkload(WorkloadTestCase):

    def setUp(self):
        super().setUp()
        self.body = b"a" * 10000
        for store in (self.origin, self.accelerator):
            store.add_object("plain.txt", self.body)
            store.add_object("archive.gz", gzip.compress(self.body))
            store.add_object("encoded", self.body, "GZIP")

    async def test_discover_keys(self):
        keys = await self.runner.discover_keys("bucket", 2)
        self.assertEqual(keys, ["archive.gz", "encoded"])
        self.assertEqual(self.accelerator.calls["list_objects"], 0)

    async def test_full_get(self):
        keys = await self.runner.discover_keys("bucket")
        report = await self.runner.run_get("bucket", keys)

        stats = report["origin_get_obj_perf_stats"]
        self.assertEqual(stats.sample_count, 3)
        self.assertIsNotNone(stats.object_size)
        self.assertEqual(stats.object_size.p90, len(self.body))
        counts = report["object_count"]
        self.assertEqual(counts["origin_count"].compressed, 2)
        self.assertEqual(counts["origin_count"].uncompressed, 1)
        self.assertEqual(counts["accelerator_count"].compressed, 2)
        for body in self.origin.bodies:
            self.assertTrue(body.closed)
            self.assertEqual(body.pos, len(body.data))

    async def test_first_byte_reads_one_byte(self):
        report = await self.runner.run_get("bucket", ["plain.txt"], first_byte_only=True)

        self.assertIn("origin_get_obj_ttfb_perf_stats", report)
        for body in self.origin.bodies + self.accelerator.bodies:
            self.assertLessEqual(body.pos, 1)
            self.assertEqual(body.reads, 1)
            self.assertTrue(body.closed)

    async def test_first_byte_not_slower_than_full_body(self):
        ttfb = await self.runner.run_get("bucket", ["plain.txt"], first_byte_only=True)
        full = await self.runner.run_get("bucket", ["plain.txt"])

        ttfb_latency = ttfb["origin_get_obj_ttfb_perf_stats"].latency.average
        full_latency = full["origin_get_obj_perf_stats"].latency.average
        self.assertLess(ttfb_latency, full_latency)
        self.assertEqual(ttfb_latency, 3.0)

    async def test_passthrough_accelerator_only(self):
        report = await self.runner.run_get("bucket", ["plain.txt", "encoded"], passthrough=True)

        self.assertEqual(self.origin.calls["get_object"], 0)
        self.assertEqual(self.accelerator.calls["get_object"], 2)
        self.assertIn("accelerator_get_obj_pt_perf_stats", report)
        self.assertEqual(set(report["object_count"]), {"accelerator_count"})

    async def test_passthrough_first_byte_group_name(self):
        report = await self.runner.run_get(
            "bucket", ["plain.txt"], first_byte_only=True, passthrough=True
        )
        self.assertIn("accelerator_get_obj_pt_ttfb_perf_stats", report)

    async def test_missing_key_aborts(self):
        with self.assertRaises(BackendError) as ctx:
            await self.runner.run_get("bucket", ["plain.txt", "missing", "encoded"])
        self.assertEqual(ctx.exception.code, "NoSuchKey")
        self.assertEqual(self.origin.calls["get_object"], 2)

    async def test_empty_key_set(self):
        report = await self.runner.run_get("bucket", [])
        stats = report["origin_get_obj_perf_stats"]
        self.assertEqual(stats.latency.average, 0)
        self.assertIsNone(stats.throughput_rate)
        self.assertEqual(report.to_dict()["origin_get_obj_perf_stats"]["throughput"],
                         {"throughput": "n/a"})


if __name__ == '__main__':
    unittest.main()
