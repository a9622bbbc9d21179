"""
Tests for frequency channels and the color transform
"""

import math
import unittest
import numpy as np

from thumbkit.channel import (
    Channel,
    ac_count,
    cosine_basis,
    decode_channel,
    encode_channel,
    enumerate_frequencies,
    sequential_sum,
)
from thumbkit.color import average_color, lpq_to_rgb, lpqa_to_rgba, rgba_to_lpqa


class TestFrequencies(unittest.TestCase):
    """Test the triangular frequency enumeration."""

    def test_chroma_order(self):
        """3x3 channels walk rows of decreasing length."""
        self.assertEqual(
            enumerate_frequencies(3, 3),
            [(1, 0), (2, 0), (0, 1), (1, 1), (0, 2)],
        )

    def test_counts(self):
        """Counts for the channel shapes the format uses."""
        self.assertEqual(ac_count(3, 3), 5)
        self.assertEqual(ac_count(5, 5), 14)
        self.assertEqual(ac_count(7, 7), 27)
        self.assertEqual(ac_count(7, 4), 18)
        self.assertEqual(ac_count(4, 7), 18)

    def test_dc_never_enumerated(self):
        """The (0, 0) pair is the DC term, not an AC coefficient."""
        for nx in range(1, 8):
            for ny in range(1, 8):
                pairs = enumerate_frequencies(nx, ny)
                self.assertNotIn((0, 0), pairs)
                self.assertEqual(len(pairs), len(set(pairs)))

    def test_anisotropic_budget(self):
        """Wide channels keep more horizontal than vertical frequencies."""
        pairs = enumerate_frequencies(7, 3)
        self.assertEqual(max(cx for cx, _ in pairs), 6)
        self.assertEqual(max(cy for _, cy in pairs), 2)


class TestChannel(unittest.TestCase):
    """Test channel encoding, decoding and reconstruction."""

    def setUp(self):
        """Create a plane holding a single horizontal cosine."""
        self.w, self.h = 8, 4
        xs = np.arange(self.w) + 0.5
        row = np.cos(math.pi / self.w * xs)
        self.plane = np.tile(row, (self.h, 1))

    def test_cosine_basis(self):
        """Row zero is all ones and row c samples cos at pixel centers."""
        basis = cosine_basis(4, 3)
        self.assertEqual(basis.shape, (3, 4))
        np.testing.assert_allclose(basis[0], np.ones(4))
        self.assertAlmostEqual(basis[1, 0], math.cos(math.pi / 4 * 0.5))

    def test_encode_constant_plane(self):
        """A flat plane has its value as DC and no AC energy."""
        channel = encode_channel(np.full(12, 0.25), 4, 3, 3, 3)

        self.assertAlmostEqual(channel.dc, 0.25)
        self.assertLess(channel.scale, 1e-9)
        self.assertEqual(len(channel.ac), 5)

    def test_encode_single_frequency(self):
        """A pure cosine lands on its (1, 0) coefficient."""
        channel = encode_channel(self.plane.ravel(), self.w, self.h, 3, 3)

        self.assertAlmostEqual(channel.dc, 0.0)
        self.assertAlmostEqual(channel.scale, 0.5)
        self.assertAlmostEqual(channel.ac[0], 1.0)
        np.testing.assert_allclose(channel.ac[1:], 0.5, atol=1e-9)

    def test_zero_scale_keeps_ac(self):
        """Without AC energy the coefficients are not renormalized."""
        channel = encode_channel(np.zeros(4), 2, 2, 3, 3)

        self.assertEqual(channel.scale, 0.0)
        np.testing.assert_array_equal(channel.ac, np.zeros(5))

    def test_decode_channel(self):
        """Nibbles 0 and 15 map to -scale and +scale."""
        channel = decode_channel(np.array([0, 15, 3, 12, 15]), 3, 3, 0.5, 0.2)

        self.assertEqual(channel.dc, 0.5)
        self.assertAlmostEqual(channel.ac[0], -0.2)
        self.assertAlmostEqual(channel.ac[1], 0.2)
        self.assertAlmostEqual(channel.ac[2], -0.12)

    def test_reconstruct_recovers_plane(self):
        """Unquantized coefficients reconstruct the source plane."""
        channel = Channel(nx=3, ny=3, dc=0.0, scale=0.5, ac=np.array([0.5, 0, 0, 0, 0]))
        plane = channel.reconstruct(cosine_basis(self.w, 3), cosine_basis(self.h, 3))

        self.assertEqual(plane.shape, (self.h, self.w))
        np.testing.assert_allclose(plane, self.plane, atol=1e-12)

    def test_reconstruct_accepts_wider_basis(self):
        """The basis may cover more frequencies than the channel uses."""
        channel = Channel(nx=3, ny=3, dc=0.3, scale=0.0, ac=np.zeros(5))
        plane = channel.reconstruct(cosine_basis(6, 7), cosine_basis(5, 7))

        np.testing.assert_allclose(plane, np.full((5, 6), 0.3))

    def test_sequential_sum_is_a_running_total(self):
        """Values are added one at a time, left to right."""
        values = np.random.RandomState(3).uniform(-1, 1, 1000)
        total = 0.0
        for value in values:
            total += value

        self.assertEqual(float(sequential_sum(values)), total)
        np.testing.assert_array_equal(
            sequential_sum(np.array([[1.0, 2.0], [3.0, 4.0]]), axis=0), [4.0, 6.0])
        self.assertEqual(float(sequential_sum(np.zeros(0))), 0.0)


class TestColor(unittest.TestCase):
    """Test the RGBA <-> LPQA transform."""

    def test_average_color_weights_alpha(self):
        """Transparent pixels do not contribute to the average color."""
        pixels = np.array([[255, 0, 0, 255], [0, 0, 255, 0]], dtype=np.uint8)
        avg, has_alpha = average_color(pixels)

        np.testing.assert_allclose(avg, [1.0, 0.0, 0.0])
        self.assertTrue(has_alpha)

    def test_opaque_has_no_alpha(self):
        pixels = np.array([[1, 2, 3, 255], [4, 5, 6, 255]], dtype=np.uint8)
        _, has_alpha = average_color(pixels)
        self.assertFalse(has_alpha)

    def test_fully_transparent(self):
        """A fully transparent image averages to black."""
        pixels = np.array([[200, 100, 50, 0]], dtype=np.uint8)
        avg, has_alpha = average_color(pixels)

        np.testing.assert_array_equal(avg, [0.0, 0.0, 0.0])
        self.assertTrue(has_alpha)

    def test_lpqa_round_trip(self):
        """LPQA converts back to the original opaque pixels."""
        pixels = np.array([[255, 0, 0, 255], [10, 200, 90, 255], [0, 0, 0, 255]], dtype=np.uint8)
        avg, _ = average_color(pixels)
        l, p, q, a = rgba_to_lpqa(pixels, avg)

        np.testing.assert_allclose(l, pixels[:, :3].mean(axis=1) / 255.0)
        np.testing.assert_array_equal(lpqa_to_rgba(l, p, q, a), pixels)

    def test_lpqa_to_rgba_clamps(self):
        """Out of range values clamp to 0 and 255."""
        rgba = lpqa_to_rgba(np.array([2.0, -1.0]), np.zeros(2), np.zeros(2), np.array([1.5, -0.5]))

        np.testing.assert_array_equal(rgba, [[255, 255, 255, 255], [0, 0, 0, 0]])

    def test_lpq_to_rgb_scalar(self):
        r, g, b = lpq_to_rgb(0.5, 0.0, 0.0)
        self.assertAlmostEqual(r, 0.5)
        self.assertAlmostEqual(g, 0.5)
        self.assertAlmostEqual(b, 0.5)


if __name__ == '__main__':
    unittest.main()
