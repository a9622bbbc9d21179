"""
thumbkit - Compact placeholder hashes for small RGBA images
"""

__version__ = "0.1.0"

from .bitpack import hash_length
from .decoder import (
    read_header,
    thumb_hash_to_approximate_aspect_ratio,
    thumb_hash_to_average_rgba,
    thumb_hash_to_rgba,
)
from .encoder import rgba_to_thumb_hash
from .errors import BufferLengthMismatch, InvalidDimensions, MalformedHash, ThumbHashError
from .models import RGBA, Header, Image
from .serialization import from_base64, from_hex, to_base64, to_hex

encode = rgba_to_thumb_hash
decode = thumb_hash_to_rgba
average_color = thumb_hash_to_average_rgba
approximate_aspect_ratio = thumb_hash_to_approximate_aspect_ratio

__all__ = [
    "encode",
    "decode",
    "average_color",
    "approximate_aspect_ratio",
    "rgba_to_thumb_hash",
    "thumb_hash_to_rgba",
    "thumb_hash_to_average_rgba",
    "thumb_hash_to_approximate_aspect_ratio",
    "read_header",
    "hash_length",
    "to_base64",
    "from_base64",
    "to_hex",
    "from_hex",
    "Image",
    "RGBA",
    "Header",
    "ThumbHashError",
    "InvalidDimensions",
    "BufferLengthMismatch",
    "MalformedHash",
]
