"""Asset catalog for nftgen.

Lists the image assets stored under a category directory in natural order and
maps human-readable trait labels back to the concrete asset paths.

Asset paths are POSIX-style and relative to the store root, e.g.
``male/trait-one-options/option-1.png``.

Usage:
    store = FileSystemAssetStore('data')
    options = list_assets(store, 'male/trait-one-options')
    asset = resolve(options, 'Option 1')

Author:
    Jake Meador <jameador13@gmail.com>
"""

import functools
import logging
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .errors import AssetNotFound

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = [
    'Asset',
    'AssetStore',
    'FileSystemAssetStore',
    'natural_compare',
    'natural_sort',
    'trim_property',
    'format_property',
    'list_assets',
    'resolve',
    'options_for',
]

logger = logging.getLogger('nftgen.catalog')

# Labels that are never reformatted
UNFORMATTED_LABELS = {'2D'}

_RUN_PATTERN = re.compile(r'[^0-9]+|[0-9]+')
_WORD_PATTERN = re.compile(r'\S+')


# ============================================================================
# Asset Storage
# ============================================================================

@dataclass(frozen=True)
class Asset:
    """Reference to a stored image.

    Attributes:
        path: Store-relative POSIX path of the image.
        category_dir: Directory the asset was listed from.
    """
    path: str
    category_dir: str

    @property
    def name(self) -> str:
        """Filename including extension."""
        return posixpath.basename(self.path)

    @property
    def stem(self) -> str:
        """Filename without extension."""
        return trim_property(self.path)

    @property
    def label(self) -> str:
        """Display-formatted filename, as used in rarity tables and metadata."""
        return format_property(self.stem)


class AssetStore:
    """Read-only, path-addressable asset storage."""

    def list_entries(self, path: str) -> list[str]:
        """Return the names of the entries directly under ``path``."""
        raise NotImplementedError

    def read_bytes(self, path: str) -> bytes:
        """Return the raw bytes stored at ``path``."""
        raise NotImplementedError


class FileSystemAssetStore(AssetStore):
    """Asset store backed by a directory tree on disk."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()

    def _locate(self, path: str) -> Path:
        return self.root.joinpath(*[part for part in path.split('/') if part])

    def list_entries(self, path: str) -> list[str]:
        directory = self._locate(path)
        if not directory.is_dir():
            raise AssetNotFound(f'Asset directory not found: {path} (root: {self.root})')
        return [entry.name for entry in directory.iterdir()]

    def read_bytes(self, path: str) -> bytes:
        file_path = self._locate(path)
        try:
            return file_path.read_bytes()
        except OSError as e:
            raise AssetNotFound(f'Asset not readable: {path} ({e})') from e

    def __repr__(self) -> str:
        return f'FileSystemAssetStore({str(self.root)!r})'


# ============================================================================
# Natural Sort
# ============================================================================

def _compare(a: str, b: str) -> int:
    return (a > b) - (a < b)


def natural_compare(a: str, b: str) -> int:
    """Compare two names treating embedded digit runs as numbers.

    Spaces are ignored. Runs are compared pairwise: digit runs by numeric value,
    with the less zero-padded run first on equal value ("1" < "01"); a digit
    run sorts before a non-digit run; non-digit runs compare lexically. Names
    whose common runs are all equal fall back to plain lexical order.

    Returns:
        Negative, zero or positive, like a classic ``cmp``.
    """
    runs_a = _RUN_PATTERN.findall(a.replace(' ', ''))
    runs_b = _RUN_PATTERN.findall(b.replace(' ', ''))

    for run_a, run_b in zip(runs_a, runs_b):
        if run_a == run_b:
            continue

        a_digits = run_a[0].isdigit()
        b_digits = run_b[0].isdigit()

        if a_digits and b_digits:
            stripped_a = run_a.lstrip('0')
            stripped_b = run_b.lstrip('0')
            if len(stripped_a) != len(stripped_b):
                return _compare(len(stripped_a), len(stripped_b))
            if stripped_a != stripped_b:
                return _compare(stripped_a, stripped_b)
            return _compare(len(run_a), len(run_b))

        if a_digits or b_digits:
            return -1 if a_digits else 1

        return _compare(run_a, run_b)

    return _compare(a, b)


def natural_sort(names: Iterable[str]) -> list[str]:
    """Return ``names`` in natural order."""
    return sorted(names, key=functools.cmp_to_key(natural_compare))


# ============================================================================
# Label Formatting
# ============================================================================

def trim_property(path: str) -> str:
    """Strip directory and extension from an asset path."""
    return posixpath.splitext(posixpath.basename(path))[0]


def format_property(raw: str) -> str:
    """Format a raw asset name for display.

    ``"trait-one-a"`` becomes ``"Trait One A"``. Only the first character of
    each word is capitalized, so ``"option-1a"`` becomes ``"Option 1a"``.
    Titlecase keeps this stable for letters like ``ß`` (``"Ss"``, not ``"SS"``).
    """
    if raw in UNFORMATTED_LABELS:
        return raw

    lowered = raw.replace('-', ' ').lower()
    return _WORD_PATTERN.sub(lambda m: m.group(0)[:1].title() + m.group(0)[1:], lowered)


# ============================================================================
# Listing and Resolution
# ============================================================================

def list_assets(store: AssetStore, category_path: str) -> list[Asset]:
    """List the assets directly under ``category_path`` in natural order."""
    category_path = category_path.strip('/')
    names = natural_sort(store.list_entries(category_path))
    logger.debug(f'Listed {len(names)} assets under {category_path}: {names}')
    return [Asset(posixpath.join(category_path, name), category_path) for name in names]


def resolve(options: Iterable[Asset], label: str) -> Asset:
    """Return the first asset whose display label equals ``label``.

    Raises:
        AssetNotFound: If no asset matches.
    """
    options = list(options)
    for asset in options:
        if asset.label == label:
            return asset

    available = [asset.label for asset in options]
    raise AssetNotFound(f'No asset matches "{label}" (available: {available})')


def options_for(store: AssetStore, directory: str, parent: Optional[Asset] = None) -> list[Asset]:
    """List the candidate assets of a category.

    Independent categories list ``directory`` itself. Dependent categories list
    the subdirectory named after the lowercased stem of the parent's resolved
    asset, so this must be called only after the parent asset has been resolved.
    """
    if parent is None:
        return list_assets(store, directory)
    return list_assets(store, posixpath.join(directory, parent.stem.lower()))
