"""
Text forms of a hash for storing next to an image URL
"""

import base64
import binascii

from .errors import MalformedHash


def to_base64(thumb_hash):
    """Encode hash bytes as standard padded base64 text."""
    return base64.b64encode(bytes(thumb_hash)).decode('ascii')


def from_base64(text):
    """
    Decode base64 text back into hash bytes.

    Missing padding is tolerated.

    Args:
        text: base64 string

    Returns:
        bytes: hash bytes

    Raises:
        MalformedHash: if the text is not valid base64
    """
    text = text.strip()
    try:
        return base64.b64decode(text + '=' * (-len(text) % 4), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedHash(f"Invalid base64 hash: {e}") from e


def to_hex(thumb_hash):
    """Encode hash bytes as lowercase hex text."""
    return bytes(thumb_hash).hex()


def from_hex(text):
    """Decode hex text back into hash bytes."""
    try:
        return bytes.fromhex(text.strip())
    except ValueError as e:
        raise MalformedHash(f"Invalid hex hash: {e}") from e
