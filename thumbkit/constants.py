"""
Format constants shared by the encoder and decoder
"""

# Encoding an image larger than this is slow with no benefit
MAX_INPUT_SIZE = 100

# Decoded placeholders are this many pixels along the longer side
OUTPUT_SIZE = 32

# Luminance frequency limit along the longer side (fewer when alpha is present)
L_LIMIT_OPAQUE = 7
L_LIMIT_ALPHA = 5
MIN_L_FREQUENCIES = 3

CHROMA_FREQUENCIES = 3
ALPHA_FREQUENCIES = 5

# Saturation boost applied to P and Q on decode to compensate for quantization
CHROMA_BOOST = 1.25

HEADER_SIZE = 5
ALPHA_HEADER_SIZE = 6
