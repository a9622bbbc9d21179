"""
Decoder - Reconstructs placeholder pixels and summary values from a hash
"""

import logging

import numpy as np

from .bitpack import (
    hash_length,
    read_dimensions,
    round_half_away,
    unpack_average,
    unpack_header,
    unpack_nibbles,
)
from .channel import ac_count, cosine_basis, decode_channel
from .color import lpq_to_rgb, lpqa_to_rgba
from .constants import (
    ALPHA_FREQUENCIES,
    CHROMA_BOOST,
    CHROMA_FREQUENCIES,
    MIN_L_FREQUENCIES,
    OUTPUT_SIZE,
)
from .errors import MalformedHash
from .models import RGBA, Image

logger = logging.getLogger(__name__)


def read_header(thumb_hash):
    """
    Parse the header of a hash without touching the AC payload.

    Args:
        thumb_hash: hash bytes

    Returns:
        Header: dequantized header values
    """
    return unpack_header(bytes(thumb_hash))


def output_size(ratio):
    """Placeholder size for an aspect ratio, OUTPUT_SIZE on the longer side."""
    if ratio > 1.0:
        return OUTPUT_SIZE, int(round_half_away(OUTPUT_SIZE / ratio))
    return int(round_half_away(OUTPUT_SIZE * ratio)), OUTPUT_SIZE


def thumb_hash_to_rgba(thumb_hash):
    """
    Decode a hash to an RGBA image.

    Args:
        thumb_hash: hash bytes

    Returns:
        Image: width, height and w*h*4 RGBA bytes, RGB not premultiplied

    Raises:
        MalformedHash: if the hash is truncated or its length does not match
            the channel dimensions in its header
    """
    thumb_hash = bytes(thumb_hash)
    header = unpack_header(thumb_hash)
    lx = max(MIN_L_FREQUENCIES, header.lx)
    ly = max(MIN_L_FREQUENCIES, header.ly)

    expected = hash_length(lx, ly, header.has_alpha)
    if len(thumb_hash) != expected:
        raise MalformedHash(
            f"Hash is {len(thumb_hash)} bytes, header declares {expected}"
        )

    dims = [
        (lx, ly, header.l_dc, header.l_scale),
        (CHROMA_FREQUENCIES, CHROMA_FREQUENCIES, header.p_dc, header.p_scale * CHROMA_BOOST),
        (CHROMA_FREQUENCIES, CHROMA_FREQUENCIES, header.q_dc, header.q_scale * CHROMA_BOOST),
    ]
    if header.has_alpha:
        dims.append((ALPHA_FREQUENCIES, ALPHA_FREQUENCIES, header.a_dc, header.a_scale))

    total = sum(ac_count(nx, ny) for nx, ny, _, _ in dims)
    nibbles = unpack_nibbles(thumb_hash, header.ac_start, total)
    channels = []
    offset = 0
    for nx, ny, dc, scale in dims:
        count = ac_count(nx, ny)
        channels.append(decode_channel(nibbles[offset:offset + count], nx, ny, dc, scale))
        offset += count

    w, h = output_size(thumb_hash_to_approximate_aspect_ratio(thumb_hash))
    min_stop = ALPHA_FREQUENCIES if header.has_alpha else CHROMA_FREQUENCIES
    fx = cosine_basis(w, max(lx, min_stop))
    fy = cosine_basis(h, max(ly, min_stop))

    planes = [channel.reconstruct(fx, fy) for channel in channels]
    if not header.has_alpha:
        planes.append(np.full((h, w), header.a_dc))
    rgba = lpqa_to_rgba(*planes)

    logger.debug(
        f"Decoded {len(thumb_hash)}-byte hash to {w}x{h}: lx={lx} ly={ly} alpha={header.has_alpha}"
    )
    return Image(width=w, height=h, rgba=rgba.tobytes())


def thumb_hash_to_average_rgba(thumb_hash):
    """
    Extract the average color of the original image.

    Only header A and, when present, the alpha byte are read.

    Args:
        thumb_hash: hash bytes

    Returns:
        RGBA: each component in [0, 1], RGB not premultiplied by A
    """
    l_dc, p_dc, q_dc, a_dc = unpack_average(bytes(thumb_hash))
    r, g, b = lpq_to_rgb(l_dc, p_dc, q_dc)
    return RGBA(
        r=float(np.clip(r, 0.0, 1.0)),
        g=float(np.clip(g, 0.0, 1.0)),
        b=float(np.clip(b, 0.0, 1.0)),
        a=a_dc,
    )


def thumb_hash_to_approximate_aspect_ratio(thumb_hash):
    """
    Extract the approximate aspect ratio (width / height) of the original image.

    Only bytes 2-4 are read, so the result is coarse: it is the ratio of the
    luminance frequency bounds, not of the pixel dimensions.

    Args:
        thumb_hash: hash bytes

    Returns:
        float: approximate aspect ratio
    """
    lx, ly, _, _ = read_dimensions(bytes(thumb_hash))
    return lx / ly
