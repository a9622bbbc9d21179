"""
Value types returned by the thumbkit pipeline
"""

from dataclasses import dataclass
from typing import NamedTuple

from .constants import ALPHA_HEADER_SIZE, HEADER_SIZE


class Image(NamedTuple):
    """A decoded placeholder. ``rgba`` holds width*height*4 bytes, row by row."""

    width: int
    height: int
    rgba: bytes


class RGBA(NamedTuple):
    """A single color with every component in [0, 1]. RGB is not premultiplied."""

    r: float
    g: float
    b: float
    a: float


@dataclass(frozen=True)
class Header:
    """
    The constant terms of a hash.

    DC terms are in [0, 1] for L and A and in [-1, 1] for P and Q. Scales are
    the maximum absolute AC value of each channel. ``lx`` and ``ly`` are the
    luminance frequency bounds as written, before the decoder raises them to
    the minimum of 3.
    """

    l_dc: float
    p_dc: float
    q_dc: float
    l_scale: float
    p_scale: float
    q_scale: float
    has_alpha: bool
    is_landscape: bool
    lx: int
    ly: int
    a_dc: float = 1.0
    a_scale: float = 1.0

    @property
    def ac_start(self):
        """Offset of the first AC byte."""
        return ALPHA_HEADER_SIZE if self.has_alpha else HEADER_SIZE
