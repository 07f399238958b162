"""Shared fixtures for nftgen tests.

Provides an in-memory asset store that records every listing, helpers for
building tiny PNG layers, and a store pre-populated for any variant.
"""

import io
import posixpath
from pathlib import Path

import pytest
from PIL import Image

from nftgen.catalog import AssetStore
from nftgen.errors import AssetNotFound
from nftgen.rarity import DependentRarityTable, RarityTable, weighted
from nftgen.variants import CategorySpec, VariantConfig


def make_png(color: tuple[int, int, int, int], size: tuple[int, int] = (4, 4)) -> bytes:
    """Encode a solid-color RGBA PNG."""
    buffer = io.BytesIO()
    Image.new('RGBA', size, color).save(buffer, format='PNG')
    return buffer.getvalue()


def kebab(label: str) -> str:
    """Asset stem for a display label ("Option 1a" -> "option-1a")."""
    return label.lower().replace(' ', '-')


class MemoryAssetStore(AssetStore):
    """Asset store over a dict of path -> bytes, recording listings and reads."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files = dict(files or {})
        self.listed: list[str] = []
        self.read: list[str] = []

    def add(self, path: str, data: bytes) -> None:
        self.files[path] = data

    def list_entries(self, path: str) -> list[str]:
        self.listed.append(path)
        prefix = path.rstrip('/') + '/'
        names = {key[len(prefix):].split('/')[0] for key in self.files if key.startswith(prefix)}
        if not names:
            raise AssetNotFound(f'Asset directory not found: {path}')
        return list(names)

    def read_bytes(self, path: str) -> bytes:
        self.read.append(path)
        if path not in self.files:
            raise AssetNotFound(f'Asset not readable: {path}')
        return self.files[path]

    def write_to(self, root: Path) -> Path:
        """Materialize the store as a directory tree under ``root``."""
        for path, data in self.files.items():
            target = root.joinpath(*path.split('/'))
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        return root


def store_for_variant(variant: VariantConfig, size: tuple[int, int] = (1, 1)) -> MemoryAssetStore:
    """Build a store holding one asset for every label in a variant's tables."""
    store = MemoryAssetStore()

    for index, category in enumerate(variant.categories):
        color = (index * 40 % 256, 100, 200, 255)
        if category.table.dependent:
            for parent_label, options in category.table.mapping.items():
                for option in options:
                    path = posixpath.join(category.directory, kebab(parent_label), f'{kebab(option.label)}.png')
                    store.add(path, make_png(color, size))
        else:
            for option in category.table.options:
                path = posixpath.join(category.directory, f'{kebab(option.label)}.png')
                store.add(path, make_png(color, size))

    return store


RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)
CLEAR = (0, 0, 0, 0)


@pytest.fixture
def small_variant():
    """Three-category variant with one dependent category, 8x8 canvas."""
    return VariantConfig(
        name='test',
        canvas_size=(8, 8),
        label='Female',
        categories=(
            CategorySpec('base', 'Base', 'base', RarityTable(weighted(('Red', 5), ('Blue', 5)))),
            CategorySpec('shade', 'Shade', 'shade', DependentRarityTable({
                'Red': weighted(('Light', 5), ('Dark', 5)),
                'Blue': weighted(('Light', 5), ('Dark', 5)),
            }), parent='base'),
            CategorySpec('top', 'Top', 'top', RarityTable(weighted(('Star One', 5), ('Star Two', 5)))),
        ),
    )


@pytest.fixture
def small_store():
    """Assets matching ``small_variant``."""
    return MemoryAssetStore({
        'base/red.png': make_png(RED, (8, 8)),
        'base/blue.png': make_png(BLUE, (8, 8)),
        'shade/red/light.png': make_png((255, 255, 255, 64)),
        'shade/red/dark.png': make_png((0, 0, 0, 64)),
        'shade/blue/light.png': make_png((255, 255, 255, 64)),
        'shade/blue/dark.png': make_png((0, 0, 0, 64)),
        'top/star-one.png': make_png(GREEN, (2, 2)),
        'top/star-two.png': make_png(GREEN, (3, 3)),
    })
