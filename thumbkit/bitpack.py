"""
Byte layout of a hash

Header A (bytes 0-2) holds the luminance and chrominance DC terms, the
luminance scale and the alpha flag. Header B (bytes 3-4) holds the shorter
luminance frequency bound, the chrominance scales and the landscape flag. An
alpha byte follows when the alpha flag is set, then the AC coefficients as
4-bit nibbles, low nibble first.
"""

import numpy as np

from .channel import ac_count
from .constants import (
    ALPHA_FREQUENCIES,
    ALPHA_HEADER_SIZE,
    CHROMA_FREQUENCIES,
    HEADER_SIZE,
    L_LIMIT_ALPHA,
    L_LIMIT_OPAQUE,
)
from .errors import MalformedHash
from .models import Header


def round_half_away(value):
    """
    Round to the nearest integer, ties away from zero.

    Every quantized field goes through this function. Python's built-in
    ``round`` and ``np.round`` round ties to even, which would make hashes
    differ by one step from other implementations.

    Args:
        value: scalar or numpy array

    Returns:
        Rounded value(s) as float
    """
    return np.sign(value) * np.floor(np.abs(value) + 0.5)


def quantize(value, bits):
    """Round a pre-scaled value and clip it into an unsigned field of ``bits`` bits."""
    return int(np.clip(round_half_away(value), 0, (1 << bits) - 1))


def hash_length(lx, ly, has_alpha):
    """
    Total hash length in bytes for the given luminance channel dimensions.

    Args:
        lx: luminance frequency bound along x (at least 3)
        ly: luminance frequency bound along y (at least 3)
        has_alpha: whether an alpha channel is present

    Returns:
        int: header size plus two nibbles per AC byte
    """
    count = ac_count(lx, ly) + 2 * ac_count(CHROMA_FREQUENCIES, CHROMA_FREQUENCIES)
    if has_alpha:
        count += ac_count(ALPHA_FREQUENCIES, ALPHA_FREQUENCIES)
    start = ALPHA_HEADER_SIZE if has_alpha else HEADER_SIZE
    return start + (count + 1) // 2


def pack_header(header):
    """
    Serialize the constant terms of a hash.

    Args:
        header: :class:`Header` with unquantized values

    Returns:
        bytearray: 5 bytes, or 6 when ``header.has_alpha`` is set
    """
    header24 = (quantize(63.0 * header.l_dc, 6)
                | quantize(31.5 + 31.5 * header.p_dc, 6) << 6
                | quantize(31.5 + 31.5 * header.q_dc, 6) << 12
                | quantize(31.0 * header.l_scale, 5) << 18
                | int(header.has_alpha) << 23)
    l_min = header.ly if header.is_landscape else header.lx
    header16 = ((l_min & 7)
                | quantize(63.0 * header.p_scale, 6) << 3
                | quantize(63.0 * header.q_scale, 6) << 9
                | int(header.is_landscape) << 15)
    packed = bytearray([
        header24 & 255,
        (header24 >> 8) & 255,
        header24 >> 16,
        header16 & 255,
        header16 >> 8,
    ])
    if header.has_alpha:
        packed.append(quantize(15.0 * header.a_dc, 4)
                      | quantize(15.0 * header.a_scale, 4) << 4)
    return packed


def read_dimensions(thumb_hash):
    """
    Read the luminance frequency bounds from bytes 2-4 only.

    Args:
        thumb_hash: hash bytes

    Returns:
        tuple: (lx, ly, has_alpha, is_landscape)
    """
    if len(thumb_hash) < HEADER_SIZE:
        raise MalformedHash(
            f"Hash is {len(thumb_hash)} bytes, expected at least {HEADER_SIZE}"
        )
    has_alpha = (thumb_hash[2] & 0x80) != 0
    is_landscape = (thumb_hash[4] & 0x80) != 0
    l_max = L_LIMIT_ALPHA if has_alpha else L_LIMIT_OPAQUE
    l_min = thumb_hash[3] & 7
    if l_min == 0:
        raise MalformedHash("Luminance frequency bound is zero")
    lx = l_max if is_landscape else l_min
    ly = l_min if is_landscape else l_max
    return lx, ly, has_alpha, is_landscape


def unpack_average(thumb_hash):
    """
    Read the DC terms from header A and the alpha byte only.

    The luminance frequency field in header B is not looked at.

    Args:
        thumb_hash: hash bytes

    Returns:
        tuple: (l_dc, p_dc, q_dc, a_dc)

    Raises:
        MalformedHash: if the hash is shorter than its header
    """
    if len(thumb_hash) < HEADER_SIZE:
        raise MalformedHash(
            f"Hash is {len(thumb_hash)} bytes, expected at least {HEADER_SIZE}"
        )
    header24 = thumb_hash[0] | (thumb_hash[1] << 8) | (thumb_hash[2] << 16)
    a_dc = 1.0
    if header24 >> 23:
        if len(thumb_hash) < ALPHA_HEADER_SIZE:
            raise MalformedHash("Hash has the alpha flag set but no alpha byte")
        a_dc = (thumb_hash[5] & 15) / 15.0
    return (
        (header24 & 63) / 63.0,
        ((header24 >> 6) & 63) / 31.5 - 1.0,
        ((header24 >> 12) & 63) / 31.5 - 1.0,
        a_dc,
    )


def unpack_header(thumb_hash):
    """
    Parse the constant terms of a hash.

    Args:
        thumb_hash: hash bytes

    Returns:
        Header: dequantized header values

    Raises:
        MalformedHash: if the hash is shorter than its header
    """
    lx, ly, has_alpha, is_landscape = read_dimensions(thumb_hash)
    l_dc, p_dc, q_dc, a_dc = unpack_average(thumb_hash)
    header24 = thumb_hash[0] | (thumb_hash[1] << 8) | (thumb_hash[2] << 16)
    header16 = thumb_hash[3] | (thumb_hash[4] << 8)
    a_scale = (thumb_hash[5] >> 4) / 15.0 if has_alpha else 1.0
    return Header(
        l_dc=l_dc,
        p_dc=p_dc,
        q_dc=q_dc,
        l_scale=((header24 >> 18) & 31) / 31.0,
        p_scale=((header16 >> 3) & 63) / 63.0,
        q_scale=((header16 >> 9) & 63) / 63.0,
        has_alpha=has_alpha,
        is_landscape=is_landscape,
        lx=lx,
        ly=ly,
        a_dc=a_dc,
        a_scale=a_scale,
    )


def pack_nibbles(values):
    """
    Quantize AC values in [0, 1] to 4 bits and pack two per byte.

    Args:
        values: flat sequence of normalized AC coefficients

    Returns:
        bytes: low nibble first, the last high nibble zero if the count is odd
    """
    nibbles = np.clip(round_half_away(15.0 * np.asarray(values, dtype=np.float64)), 0, 15)
    nibbles = nibbles.astype(np.uint8)
    if len(nibbles) % 2:
        nibbles = np.append(nibbles, np.uint8(0))
    return (nibbles[0::2] | (nibbles[1::2] << 4)).tobytes()


def unpack_nibbles(thumb_hash, start, count):
    """
    Read ``count`` 4-bit values starting at byte ``start``.

    Args:
        thumb_hash: hash bytes
        start: offset of the first AC byte
        count: number of nibbles to read

    Returns:
        np.ndarray: nibble values as uint8
    """
    data = np.frombuffer(bytes(thumb_hash[start:]), dtype=np.uint8)
    if len(data) * 2 < count:
        raise MalformedHash(
            f"Hash holds {len(data) * 2} AC nibbles, header declares {count}"
        )
    nibbles = np.empty(len(data) * 2, dtype=np.uint8)
    nibbles[0::2] = data & 15
    nibbles[1::2] = data >> 4
    return nibbles[:count]
