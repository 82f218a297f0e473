# -*- coding: utf-8 -*-
"""Tests for the random scalar helpers."""
import random
import unittest

import numpy as np

from chartseries.tools.rng import bernoulli, get_rng, random_number, random_unit


class TestRandomNumber(unittest.TestCase):

    def test_default_range(self):
        rng = get_rng(0)
        values = [random_number(rng=rng) for _ in range(1000)]
        self.assertTrue(all(0 <= v < 100 for v in values))
        self.assertGreater(max(values) - min(values), 50, "Should spread over the range")

    def test_bounds(self):
        rng = get_rng(1)
        for _ in range(500):
            value = random_number(-3.5, 2.0, rng=rng)
            self.assertGreaterEqual(value, -3.5)
            self.assertLess(value, 2.0)

    def test_reversed_range(self):
        rng = get_rng(2)
        for _ in range(500):
            value = random_number(10, 0, rng=rng)
            self.assertGreater(value, 0)
            self.assertLessEqual(value, 10)

    def test_degenerate_range(self):
        self.assertEqual(random_number(7, 7, rng=get_rng(3)), 7)

    def test_unseeded(self):
        value = random_number(0, 1)
        self.assertTrue(0 <= value < 1)
        self.assertTrue(0 <= random_unit() < 1)


class TestGetRng(unittest.TestCase):

    def test_seeded(self):
        self.assertEqual(random_unit(get_rng(42)), random_unit(get_rng(42)))

    def test_passthrough(self):
        for source in (np.random.default_rng(0), np.random.RandomState(0), random.Random(0)):
            self.assertIs(get_rng(source), source)
            self.assertTrue(0 <= random_unit(source) < 1)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            get_rng(1.5)


class TestBernoulli(unittest.TestCase):

    def test_boundaries(self):
        rng = get_rng(5)
        self.assertFalse(any(bernoulli(0, rng) for _ in range(1000)))
        self.assertTrue(all(bernoulli(1, rng) for _ in range(1000)))

    def test_none_and_nan_never_succeed(self):
        rng = get_rng(6)
        self.assertFalse(any(bernoulli(None, rng) for _ in range(200)))
        self.assertFalse(any(bernoulli(float('nan'), rng) for _ in range(200)))

    def test_always_draws(self):
        rng = random.Random(9)
        reference = random.Random(9)
        bernoulli(None, rng)
        reference.random()
        self.assertEqual(rng.random(), reference.random())

    def test_rate(self):
        rng = get_rng(7)
        hits = sum(bernoulli(0.3, rng) for _ in range(10000))
        self.assertTrue(2700 < hits < 3300, f"hits={hits}")


if __name__ == '__main__':
    unittest.main()
