"""Image decoding and encoding for nftgen, backed by Pillow.

Author:
    Jake Meador <jameador13@gmail.com>
"""

import io
from pathlib import Path

from PIL import Image

from .errors import DecodeFailure, EncodeFailure

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = ['decode', 'encode', 'format_for_path', 'DEFAULT_JPEG_QUALITY']

DEFAULT_JPEG_QUALITY = 95

# Output extension -> Pillow format name (anything else is PNG)
EXTENSION_FORMATS = {
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
    '.gif': 'GIF',
}


def format_for_path(path: str | Path) -> str:
    """Pick the output format from a file extension, defaulting to PNG."""
    return EXTENSION_FORMATS.get(Path(path).suffix.lower(), 'PNG')


def decode(data: bytes) -> Image.Image:
    """Decode raw bytes into an RGBA image.

    Raises:
        DecodeFailure: If the bytes are not a readable image.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
        return img.convert('RGBA')
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailure(f'Could not decode image ({len(data)} bytes): {e}') from e


def encode(img: Image.Image, fmt: str = 'PNG', quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Encode an image as PNG, JPEG or GIF.

    Raises:
        EncodeFailure: If Pillow cannot write the image in ``fmt``.
    """
    fmt = fmt.upper()
    buffer = io.BytesIO()
    try:
        if fmt == 'JPEG':
            img.convert('RGB').save(buffer, format='JPEG', quality=quality)
        else:
            img.save(buffer, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeFailure(f'Could not encode image as {fmt}: {e}') from e
    return buffer.getvalue()
