"""nftgen - Rarity-weighted layered image and metadata generator."""

__author__ = 'Jake Meador <jameador13@gmail.com>'
__version__ = '0.1.0'

from .errors import (
    AssetNotFound,
    DecodeFailure,
    EncodeFailure,
    GenerationError,
    NoOptionsAvailable,
    UnsupportedVariant,
)
from .generator import GenerationResult, generate, generate_file, run
from .variants import resolve_variant
from . import config

__all__ = [
    'generate',
    'generate_file',
    'run',
    'resolve_variant',
    'GenerationResult',
    'GenerationError',
    'AssetNotFound',
    'NoOptionsAvailable',
    'DecodeFailure',
    'EncodeFailure',
    'UnsupportedVariant',
    'config',
]
