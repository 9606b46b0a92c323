"""
Tests for the combined put/delete/list/get benchmark.
"""

import os
import sys
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.composite import CompositeRunner
from algorithms.workloads import WorkloadRunner
from common.errors import BackendError
from common.operations import Backend
from configuration import PERF_KEY_PREFIX
from fakes import FakeClock, FakeObjectStore


class TestCompositeRunner(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.origin = FakeObjectStore(Backend.ORIGIN, self.clock)
        self.accelerator = FakeObjectStore(Backend.ACCELERATOR, self.clock)
        for store in (self.origin, self.accelerator):
            store.add_object("existing-1", b"one")
            store.add_object("existing-2.gz", b"\x1f\x8b not really", None)
        runner = WorkloadRunner(self.origin, self.accelerator, clock=self.clock)
        self.composite = CompositeRunner(runner)

    async def test_all_phases_merged(self):
        report = await self.composite.execute("bucket", num_keys=5, object_length=10)

        expected = {
            "origin_put_obj_perf_stats", "accelerator_put_obj_perf_stats",
            "origin_del_obj_perf_stats", "accelerator_del_obj_perf_stats",
            "origin_list_objects_perf_stats", "accelerator_list_objects_perf_stats",
            "origin_get_obj_perf_stats", "accelerator_get_obj_perf_stats",
            "object_count",
        }
        self.assertEqual(set(report.groups), expected)

    async def test_get_uses_keys_discovered_after_delete(self):
        """Gets fetch what exists after the synthetic keys were deleted."""
        report = await self.composite.execute("bucket", num_keys=5)

        self.assertEqual(self.origin.calls["put_object"], 5)
        self.assertEqual(self.origin.calls["delete_object"], 5)
        self.assertEqual(self.origin.calls["get_object"], 2)
        self.assertEqual(report["origin_get_obj_perf_stats"].sample_count, 2)
        self.assertFalse(any(k.startswith(PERF_KEY_PREFIX) for k in self.origin.objects))

    async def test_single_backend(self):
        report = await self.composite.execute("bucket", num_keys=3, backend=Backend.ACCELERATOR)

        self.assertEqual(self.origin.calls["put_object"], 0)
        self.assertEqual(self.origin.calls["get_object"], 0)
        # Keys are still discovered from the origin listing
        self.assertEqual(self.origin.calls["list_objects"], 1)
        self.assertNotIn("origin_put_obj_perf_stats", report)

    async def test_put_failure_aborts_remaining_phases(self):
        """A failed third put stops the run before delete, list and get."""
        self.origin.fail_on = {"put_object": 3}

        with self.assertRaises(BackendError):
            await self.composite.execute("bucket", num_keys=5)

        for store in (self.origin, self.accelerator):
            self.assertEqual(store.calls["delete_object"], 0)
            self.assertEqual(store.calls["list_objects"], 0)
            self.assertEqual(store.calls["get_object"], 0)
        self.assertEqual(self.accelerator.calls["put_object"], 0)


if __name__ == '__main__':
    unittest.main()
