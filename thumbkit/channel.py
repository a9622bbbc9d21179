"""
Frequency-domain encoding of a single LPQA plane

A channel keeps the DC term, a scale and the AC coefficients for a triangular
set of (cx, cy) frequency pairs bounded by (nx, ny). Low vertical frequencies
get more horizontal terms than high ones.
"""

import math
from dataclasses import dataclass, field

import numpy as np


def enumerate_frequencies(nx, ny):
    """
    List the AC frequency pairs of an (nx, ny) channel in wire order.

    The DC pair (0, 0) is not included. Encoder, decoder and reconstruction
    all walk this list, so the position of a coefficient in a hash is its
    index here.

    Args:
        nx: horizontal frequency bound
        ny: vertical frequency bound

    Returns:
        list: (cx, cy) tuples
    """
    pairs = []
    for cy in range(ny):
        cx = 0 if cy > 0 else 1
        while cx * ny < nx * (ny - cy):
            pairs.append((cx, cy))
            cx += 1
    return pairs


def ac_count(nx, ny):
    """Number of AC coefficients in an (nx, ny) channel."""
    return len(enumerate_frequencies(nx, ny))


def cosine_basis(size, stop):
    """
    Sample the cosine basis on a grid of ``size`` pixel centers.

    Args:
        size: number of pixels along the axis
        stop: number of frequencies

    Returns:
        np.ndarray: (stop, size) array, row ``c`` is cos(pi/size * c * (i + 0.5))
    """
    return np.array([
        [math.cos(math.pi / size * c * (i + 0.5)) for i in range(size)]
        for c in range(stop)
    ]).reshape(stop, size)


@dataclass
class Channel:
    """One plane's DC term, AC coefficients and scale for an (nx, ny) bound."""

    nx: int
    ny: int
    dc: float = 0.0
    scale: float = 0.0
    ac: np.ndarray = field(default_factory=lambda: np.zeros(0))

    def reconstruct(self, fx, fy):
        """
        Evaluate the channel on an output grid.

        Args:
            fx: (cx_stop, w) basis from :func:`cosine_basis`, cx_stop >= nx
            fy: (cy_stop, h) basis from :func:`cosine_basis`, cy_stop >= ny

        Returns:
            np.ndarray: (h, w) plane
        """
        grid = np.zeros((self.ny, self.nx))
        for (cx, cy), value in zip(enumerate_frequencies(self.nx, self.ny), self.ac):
            grid[cy, cx] = value
        return self.dc + 2.0 * (fy[:self.ny].T @ grid @ fx[:self.nx])


def sequential_sum(values, axis=None):
    """
    Add values one at a time in order.

    ``np.sum`` uses pairwise summation, which rounds differently from a
    running total. Quantized fields sit on exact ties when a coefficient is
    zero, so the order of additions decides the wire bytes.

    Args:
        values: numpy array
        axis: axis to sum along, or None for the flattened array

    Returns:
        Sum(s) as float
    """
    if axis is None:
        values = np.ravel(values)
        axis = 0
    if values.shape[axis] == 0:
        return np.sum(values, axis=axis)
    return np.take(np.add.accumulate(values, axis=axis), -1, axis=axis)


def encode_channel(values, w, h, nx, ny):
    """
    Project a plane onto the cosine basis.

    Each coefficient is a running total of ``value * fx[x] * fy[y]`` over the
    pixels in row-major order. AC coefficients are renormalized into [0, 1]
    by the scale, ready for 4-bit quantization. A plane with no AC energy
    keeps a scale of 0 and all-zero AC.

    Args:
        values: flat row-major plane of w*h floats
        w: image width
        h: image height
        nx: horizontal frequency bound
        ny: vertical frequency bound

    Returns:
        Channel: encoded channel
    """
    plane = np.asarray(values, dtype=np.float64).reshape(h, w)
    fx = cosine_basis(w, nx)
    fy = cosine_basis(h, ny)

    def project(cx, cy):
        terms = (plane * fx[cx][None, :]) * fy[cy][:, None]
        return float(sequential_sum(terms)) / (w * h)

    dc = project(0, 0)
    ac = np.array([project(cx, cy) for cx, cy in enumerate_frequencies(nx, ny)])
    scale = float(np.abs(ac).max()) if len(ac) else 0.0
    if scale > 0:
        ac = 0.5 + 0.5 / scale * ac
    return Channel(nx=nx, ny=ny, dc=dc, scale=scale, ac=ac)


def decode_channel(nibbles, nx, ny, dc, scale):
    """
    Dequantize AC nibbles back into signed coefficients.

    Args:
        nibbles: 4-bit values in wire order, exactly ``ac_count(nx, ny)`` long
        nx: horizontal frequency bound
        ny: vertical frequency bound
        dc: DC term from the header
        scale: scale from the header, already boosted for chrominance

    Returns:
        Channel: channel with AC values in [-scale, scale]
    """
    ac = (np.asarray(nibbles, dtype=np.float64) / 7.5 - 1.0) * scale
    return Channel(nx=nx, ny=ny, dc=dc, scale=scale, ac=ac)
