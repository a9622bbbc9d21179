"""
Encoder - Compresses a small RGBA image into a hash
"""

import logging

from .bitpack import pack_header, pack_nibbles, round_half_away
from .channel import encode_channel
from .color import average_color, flatten_rgba, rgba_to_lpqa
from .constants import (
    ALPHA_FREQUENCIES,
    CHROMA_FREQUENCIES,
    L_LIMIT_ALPHA,
    L_LIMIT_OPAQUE,
    MAX_INPUT_SIZE,
    MIN_L_FREQUENCIES,
)
from .errors import BufferLengthMismatch, InvalidDimensions
from .models import Header

logger = logging.getLogger(__name__)


def luminance_bounds(w, h, has_alpha):
    """
    Luminance frequency bounds for an image, favoring its longer axis.

    Args:
        w: image width
        h: image height
        has_alpha: whether the image has transparent pixels

    Returns:
        tuple: (lx, ly), each at least 1
    """
    limit = L_LIMIT_ALPHA if has_alpha else L_LIMIT_OPAQUE
    longest = max(w, h)
    lx = max(1, int(round_half_away(limit * w / longest)))
    ly = max(1, int(round_half_away(limit * h / longest)))
    return lx, ly


def rgba_to_thumb_hash(w, h, rgba):
    """
    Encode an RGBA image to a hash.

    Args:
        w: image width, at most 100
        h: image height, at most 100
        rgba: w*h*4 bytes, row by row, RGB not premultiplied by A. Any
            bytes-like object, sequence of ints or numpy array is accepted.

    Returns:
        bytes: the hash

    Raises:
        InvalidDimensions: if w or h is outside 1..100
        BufferLengthMismatch: if rgba does not hold w*h*4 values
    """
    if not (1 <= w <= MAX_INPUT_SIZE and 1 <= h <= MAX_INPUT_SIZE):
        raise InvalidDimensions(
            f"Image is {w}x{h}, both sides must be between 1 and {MAX_INPUT_SIZE}"
        )
    samples = flatten_rgba(rgba)
    if samples.size != w * h * 4:
        raise BufferLengthMismatch(
            f"Expected {w * h * 4} RGBA values for a {w}x{h} image, got {samples.size}"
        )
    pixels = samples.reshape(-1, 4)

    avg, has_alpha = average_color(pixels)
    lx, ly = luminance_bounds(w, h, has_alpha)
    l, p, q, a = rgba_to_lpqa(pixels, avg)

    l_channel = encode_channel(l, w, h, max(MIN_L_FREQUENCIES, lx), max(MIN_L_FREQUENCIES, ly))
    p_channel = encode_channel(p, w, h, CHROMA_FREQUENCIES, CHROMA_FREQUENCIES)
    q_channel = encode_channel(q, w, h, CHROMA_FREQUENCIES, CHROMA_FREQUENCIES)
    channels = [l_channel, p_channel, q_channel]
    a_dc, a_scale = 1.0, 1.0
    if has_alpha:
        a_channel = encode_channel(a, w, h, ALPHA_FREQUENCIES, ALPHA_FREQUENCIES)
        channels.append(a_channel)
        a_dc, a_scale = a_channel.dc, a_channel.scale

    header = Header(
        l_dc=l_channel.dc,
        p_dc=p_channel.dc,
        q_dc=q_channel.dc,
        l_scale=l_channel.scale,
        p_scale=p_channel.scale,
        q_scale=q_channel.scale,
        has_alpha=has_alpha,
        is_landscape=w > h,
        lx=lx,
        ly=ly,
        a_dc=a_dc,
        a_scale=a_scale,
    )
    ac = [value for channel in channels for value in channel.ac]
    thumb_hash = bytes(pack_header(header) + pack_nibbles(ac))

    logger.debug(
        f"Encoded {w}x{h} image: lx={lx} ly={ly} alpha={has_alpha} "
        f"ac={len(ac)} length={len(thumb_hash)}"
    )
    return thumb_hash
