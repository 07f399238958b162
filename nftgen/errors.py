"""Error types raised by the nftgen generation pipeline.

Every error is terminal for the generation attempt that raised it.

Author:
    Jake Meador <jameador13@gmail.com>
"""

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = [
    'GenerationError',
    'AssetNotFound',
    'NoOptionsAvailable',
    'DecodeFailure',
    'EncodeFailure',
    'UnsupportedVariant',
]


class GenerationError(Exception):
    """Base class for all generation failures."""


class AssetNotFound(GenerationError):
    """A chosen label or path could not be resolved to a stored asset."""


class NoOptionsAvailable(GenerationError):
    """A category has an empty or unmapped weighted option set."""


class DecodeFailure(GenerationError):
    """Stored bytes are not a decodable image."""


class EncodeFailure(GenerationError):
    """The canvas could not be serialized to the requested format."""


class UnsupportedVariant(GenerationError):
    """The variant selector is not recognized."""
