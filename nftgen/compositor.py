"""Layer compositor for nftgen.

Draws decoded asset layers onto a fixed-size transparent canvas, anchored at
the origin, using source-over alpha compositing. Later layers sit on top.

Author:
    Jake Meador <jameador13@gmail.com>
"""

import logging
from typing import Iterable

from PIL import Image

from . import codec
from .catalog import AssetStore

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = ['new_canvas', 'draw_layer', 'composite']

logger = logging.getLogger('nftgen.compositor')


def new_canvas(size: tuple[int, int]) -> Image.Image:
    """Allocate a fully transparent RGBA canvas."""
    return Image.new('RGBA', size, (0, 0, 0, 0))


def draw_layer(canvas: Image.Image, layer: Image.Image) -> None:
    """Composite ``layer`` over ``canvas`` in place at the origin.

    Layers larger than the canvas are clipped, smaller ones only cover the
    top-left region they span.
    """
    if layer.mode != 'RGBA':
        layer = layer.convert('RGBA')

    width = min(layer.width, canvas.width)
    height = min(layer.height, canvas.height)
    if (width, height) != layer.size:
        layer = layer.crop((0, 0, width, height))

    canvas.alpha_composite(layer, dest=(0, 0))


def composite(canvas_size: tuple[int, int], asset_paths: Iterable[str], store: AssetStore) -> Image.Image:
    """Decode each asset in order and stack it onto a new canvas.

    Args:
        canvas_size: ``(width, height)`` of the output image.
        asset_paths: Store paths in draw order (bottom layer first).
        store: Asset store the layers are read from.

    Returns:
        The flattened RGBA image.

    Raises:
        DecodeFailure: If any layer cannot be decoded. No image is returned.
        AssetNotFound: If any layer cannot be read from the store.
    """
    canvas = new_canvas(canvas_size)

    for path in asset_paths:
        layer = codec.decode(store.read_bytes(path))
        logger.debug(f'Drawing layer {path} ({layer.width}x{layer.height})')
        draw_layer(canvas, layer)

    return canvas
