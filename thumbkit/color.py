"""
Color transform between RGBA pixels and the LPQA representation

L is luminance, P is yellow-blue, Q is red-green and A is alpha. Pixels are
composited atop the average color before conversion so fully transparent
pixels do not drag the color channels toward black.
"""

import numpy as np

from .bitpack import round_half_away
from .channel import sequential_sum


def flatten_rgba(rgba):
    """
    View any RGBA buffer as a flat uint8 array.

    Args:
        rgba: bytes-like object, sequence of ints or numpy array

    Returns:
        np.ndarray: one value per sample

    Raises:
        TypeError: if the samples are not integers
        ValueError: if a sample is outside 0..255
    """
    if isinstance(rgba, (bytes, bytearray, memoryview)):
        return np.frombuffer(rgba, dtype=np.uint8)
    samples = np.asarray(rgba).reshape(-1)
    if samples.size == 0:
        return samples.astype(np.uint8)
    if samples.dtype.kind not in 'ui':
        raise TypeError(f"RGBA samples must be 8-bit integers, got {samples.dtype}")
    if samples.min() < 0 or samples.max() > 255:
        raise ValueError("RGBA samples must be between 0 and 255")
    return samples.astype(np.uint8)


def average_color(pixels):
    """
    Compute the alpha-weighted average color of an image.

    The totals are running sums over the pixels in order, like the channel
    projections in :mod:`thumbkit.channel`.

    Args:
        pixels: (n, 4) uint8 array

    Returns:
        tuple: (avg_r, avg_g, avg_b) in [0, 1], and whether any pixel is
        not fully opaque
    """
    alpha = pixels[:, 3] / 255.0
    totals = sequential_sum((alpha / 255.0)[:, None] * pixels[:, :3], axis=0)
    alpha_sum = float(sequential_sum(alpha))
    if alpha_sum > 0:
        totals = totals / alpha_sum
    has_alpha = bool(alpha_sum < len(pixels))
    return totals, has_alpha


def rgba_to_lpqa(pixels, avg):
    """
    Convert pixels to LPQA planes, compositing each one atop ``avg``.

    Args:
        pixels: (n, 4) uint8 array
        avg: average (r, g, b) from :func:`average_color`

    Returns:
        tuple: flat l, p, q, a float arrays
    """
    alpha = pixels[:, 3] / 255.0
    rgb = (avg[None, :] * (1.0 - alpha[:, None])
           + alpha[:, None] / 255.0 * pixels[:, :3])
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    l = (r + g + b) / 3.0
    p = (r + g) / 2.0 - b
    q = r - g
    return l, p, q, alpha


def lpq_to_rgb(l, p, q):
    """Invert the LPQ transform. Works on scalars and arrays alike."""
    b = l - 2.0 / 3.0 * p
    r = (3.0 * l - b + q) / 2.0
    g = r - q
    return r, g, b


def lpqa_to_rgba(l, p, q, a):
    """
    Convert LPQA planes back to 8-bit RGBA.

    Args:
        l, p, q, a: float arrays of identical shape

    Returns:
        np.ndarray: uint8 array with a trailing axis of 4
    """
    r, g, b = lpq_to_rgb(l, p, q)
    planes = np.stack([r, g, b, a], axis=-1)
    scaled = 255.0 * np.clip(planes, 0.0, 1.0)
    return np.maximum(0, round_half_away(scaled)).astype(np.uint8)
