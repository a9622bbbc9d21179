"""
Command-line interface for thumbkit
"""

import logging
import time
from pathlib import Path

import click
import numpy as np

from .decoder import (
    read_header,
    thumb_hash_to_approximate_aspect_ratio,
    thumb_hash_to_average_rgba,
    thumb_hash_to_rgba,
)
from .encoder import rgba_to_thumb_hash
from .errors import ThumbHashError
from .serialization import from_base64, from_hex, to_base64, to_hex

logger = logging.getLogger(__name__)

hex_option = click.option('--hex', 'use_hex', is_flag=True,
                          help='Read/print the hash as hex instead of base64')


def _parse_hash(text, use_hex):
    try:
        return from_hex(text) if use_hex else from_base64(text)
    except ThumbHashError as e:
        raise click.ClickException(str(e))


def _format_hash(thumb_hash, use_hex):
    return to_hex(thumb_hash) if use_hex else to_base64(thumb_hash)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose):
    """thumbkit - Compact placeholder hashes for small RGBA images"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--width', '-w', required=True, type=int, help='Image width in pixels')
@click.option('--height', '-h', required=True, type=int, help='Image height in pixels')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write raw hash bytes to this file instead of printing')
@hex_option
def encode(input_file, width, height, output, use_hex):
    """Encode a raw RGBA file (width*height*4 bytes) to a hash."""
    rgba = Path(input_file).read_bytes()
    try:
        thumb_hash = rgba_to_thumb_hash(width, height, rgba)
    except ThumbHashError as e:
        raise click.ClickException(str(e))

    if output:
        Path(output).write_bytes(thumb_hash)
        click.echo(f"Hash ({len(thumb_hash)} bytes) saved to {output}")
    else:
        click.echo(_format_hash(thumb_hash, use_hex))


@main.command()
@click.argument('thumb_hash')
@click.argument('output_file', type=click.Path(dir_okay=False))
@hex_option
def decode(thumb_hash, output_file, use_hex):
    """Decode a hash and write the placeholder as raw RGBA bytes."""
    try:
        image = thumb_hash_to_rgba(_parse_hash(thumb_hash, use_hex))
    except ThumbHashError as e:
        raise click.ClickException(str(e))

    Path(output_file).write_bytes(image.rgba)
    click.echo(f"{image.width}x{image.height} placeholder saved to {output_file}")


@main.command()
@click.argument('thumb_hash')
@hex_option
def average(thumb_hash, use_hex):
    """Print the average RGBA color stored in a hash."""
    try:
        color = thumb_hash_to_average_rgba(_parse_hash(thumb_hash, use_hex))
    except ThumbHashError as e:
        raise click.ClickException(str(e))

    click.echo(f"r={color.r:.4f} g={color.g:.4f} b={color.b:.4f} a={color.a:.4f}")


@main.command()
@click.argument('thumb_hash')
@hex_option
def ratio(thumb_hash, use_hex):
    """Print the approximate aspect ratio stored in a hash."""
    try:
        value = thumb_hash_to_approximate_aspect_ratio(_parse_hash(thumb_hash, use_hex))
    except ThumbHashError as e:
        raise click.ClickException(str(e))

    click.echo(f"{value:.4f}")


@main.command()
@click.argument('thumb_hash')
@hex_option
def info(thumb_hash, use_hex):
    """Print the header fields of a hash."""
    data = _parse_hash(thumb_hash, use_hex)
    try:
        header = read_header(data)
    except ThumbHashError as e:
        raise click.ClickException(str(e))

    click.echo(f"Length: {len(data)} bytes")
    click.echo(f"Alpha: {'yes' if header.has_alpha else 'no'}")
    click.echo(f"Orientation: {'landscape' if header.is_landscape else 'portrait or square'}")
    click.echo(f"Luminance bounds: lx={header.lx} ly={header.ly}")
    click.echo(f"DC: L={header.l_dc:.4f} P={header.p_dc:.4f} Q={header.q_dc:.4f} A={header.a_dc:.4f}")
    click.echo(f"Scale: L={header.l_scale:.4f} P={header.p_scale:.4f} "
               f"Q={header.q_scale:.4f} A={header.a_scale:.4f}")


@main.command()
@click.option('--width', '-w', default=100, type=int, help='Image width (default: 100)')
@click.option('--height', '-h', default=75, type=int, help='Image height (default: 75)')
@click.option('--iterations', '-n', default=100, type=click.IntRange(min=1),
              help='Number of encode/decode calls to time (default: 100)')
def benchmark(width, height, iterations):
    """Benchmark encoding and decoding on a synthetic gradient."""
    ys, xs = np.mgrid[0:height, 0:width]
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[..., 0] = xs * 255 // max(1, width - 1)
    image[..., 1] = ys * 255 // max(1, height - 1)
    image[..., 2] = 128
    image[..., 3] = 255
    rgba = image.tobytes()

    try:
        start_time = time.time()
        for _ in range(iterations):
            thumb_hash = rgba_to_thumb_hash(width, height, rgba)
        encode_time = time.time() - start_time

        start_time = time.time()
        for _ in range(iterations):
            thumb_hash_to_rgba(thumb_hash)
        decode_time = time.time() - start_time
    except ThumbHashError as e:
        raise click.ClickException(str(e))

    logger.debug(f"Benchmark hash: {to_base64(thumb_hash)}")
    click.echo(f"Image size: {width}x{height}")
    click.echo(f"Hash length: {len(thumb_hash)} bytes")
    click.echo(f"Encoding time: {encode_time / iterations * 1000:.3f}ms per call")
    click.echo(f"Decoding time: {decode_time / iterations * 1000:.3f}ms per call")


if __name__ == '__main__':
    main()
