"""
Tests for the nearest-rank statistics and throughput helpers.
"""

import os
import random
import sys
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.metrics_utils import aggregate, calculate_throughput


class TestAggregate(unittest.TestCase):
    """Average and p50/p90 over sample sequences."""

    def assert_nearest_rank(self, samples):
        summary = aggregate(samples)
        ordered = sorted(samples)
        self.assertEqual(summary.p50, ordered[len(samples) // 2])
        self.assertEqual(summary.p90, ordered[int(len(samples) * 0.9)])
        self.assertAlmostEqual(summary.average, sum(samples) / len(samples))

    def test_matches_sorted_index_definition(self):
        """p50/p90 are sorted[n // 2] and sorted[int(n * 0.9)] for varied inputs."""
        rng = random.Random(42)
        for n in (1, 2, 3, 7, 10, 11, 99, 1000):
            with self.subTest(n=n):
                self.assert_nearest_rank([rng.randint(0, 500) for _ in range(n)])
                self.assert_nearest_rank([rng.uniform(0.0, 50.0) for _ in range(n)])

    def test_not_interpolated(self):
        """Percentiles pick real samples instead of interpolating between them."""
        summary = aggregate([1, 2, 3, 4])
        self.assertEqual(summary.p50, 3)
        self.assertEqual(summary.p90, 4)

    def test_small_sample_p90_is_maximum(self):
        """With three samples p90 lands on the last index."""
        summary = aggregate([30, 10, 20])
        self.assertEqual(summary.p50, 20)
        self.assertEqual(summary.p90, 30)

    def test_ten_samples(self):
        """With ten samples p90 is index 9."""
        summary = aggregate(list(range(10, 0, -1)))
        self.assertEqual(summary.p50, 6)
        self.assertEqual(summary.p90, 10)
        self.assertAlmostEqual(summary.average, 5.5)

    def test_empty(self):
        """Empty input does not fault and averages to zero."""
        summary = aggregate([])
        self.assertEqual(summary.average, 0)
        self.assertIsNone(summary.p50)
        self.assertIsNone(summary.p90)

    def test_returns_native_numbers(self):
        """Percentiles come back as plain Python numbers."""
        summary = aggregate([5, 1, 3])
        self.assertIs(type(summary.p50), int)
        self.assertIs(type(summary.average), float)

    def test_input_not_modified(self):
        """Aggregation leaves the caller's sequence order alone."""
        samples = [3.0, 1.0, 2.0]
        aggregate(samples)
        self.assertEqual(samples, [3.0, 1.0, 2.0])


class TestThroughput(unittest.TestCase):
    """Objects per millisecond."""

    def test_rate(self):
        self.assertAlmostEqual(calculate_throughput(10, 4.0), 2.5)

    def test_zero_duration_is_undefined(self):
        """A zero total duration yields no rate."""
        self.assertIsNone(calculate_throughput(5, 0))
        self.assertIsNone(calculate_throughput(0, 0.0))


if __name__ == '__main__':
    unittest.main()
