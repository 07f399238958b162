"""nftgen core - trait selection and layered composition.

This module runs one generation: it draws a rarity-weighted label for every
category of a variant, resolves each label to its stored asset, composites
the assets in draw order and assembles the matching metadata attributes.

Dependent categories are handled strictly in sequence: the parent label is
drawn and resolved to an asset first, then the dependent options are listed
from the directory named after that asset, then the dependent label is drawn.

Usage:
    # Programmatic usage
    from nftgen import generate
    result = generate('female', seed=42)
    result.image.save('nft.png')

    # CLI usage
    python -m nftgen generate female -o output/nft.png

Author:
    Jake Meador <jameador13@gmail.com>
"""

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from PIL import Image

from . import codec, config
from .catalog import AssetStore, FileSystemAssetStore, options_for, resolve
from .compositor import composite
from .errors import NoOptionsAvailable
from .metadata import Attribute, assemble, build_record, count_existing_outputs, write_metadata
from .selector import make_rng, new_seed, select_category
from .variants import TraitChoice, VariantConfig, resolve_variant

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = [
    'GenerationResult',
    'select_traits',
    'generate',
    'generate_file',
    'configure_logging',
    'run',
]

logger = logging.getLogger('nftgen')


@dataclass
class GenerationResult:
    """Output of one generation call.

    Attributes:
        image: Flattened RGBA image.
        attributes: Metadata attributes in category order.
        choices: Trait choices in category order.
        seed: Seed the random generator was built from, or None when the
            caller supplied its own generator.
    """
    image: Image.Image
    attributes: list[Attribute]
    choices: list[TraitChoice]
    seed: Optional[int] = None

    @property
    def asset_paths(self) -> list[str]:
        return [choice.asset.path for choice in self.choices]


def select_traits(variant: VariantConfig, store: AssetStore, rng: random.Random) -> list[TraitChoice]:
    """Choose and resolve one trait per category, in category order.

    Raises:
        NoOptionsAvailable: If a category has no weighted options (including a
            dependent category whose parent label has no sub-table).
        AssetNotFound: If a chosen label has no matching stored asset.
    """
    resolved: dict[str, TraitChoice] = {}

    for category in variant.categories:
        parent = resolved[category.parent] if category.parent else None
        parent_label = parent.label if parent else None

        weights = category.table.options_for(parent_label)
        if not weights:
            if parent is not None:
                raise NoOptionsAvailable(
                    f'No {category.trait_type} options for {parent.category.trait_type} "{parent_label}"'
                )
            raise NoOptionsAvailable(f'No {category.trait_type} options')

        assets = options_for(store, category.directory, parent.asset if parent else None)
        label = select_category(weights, rng)
        logger.info(f'{category.trait_type}: {label}')

        asset = resolve(assets, label)
        logger.debug(f'{category.trait_type} resolved to {asset.path}')
        resolved[category.key] = TraitChoice(category, label, asset)

    return list(resolved.values())


def generate(
    variant: VariantConfig | str,
    store: Optional[AssetStore] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    settings: Optional[dict[str, Any]] = None,
) -> GenerationResult:
    """Generate one composite image and its attributes.

    Args:
        variant: Variant config, or a selector such as ``male`` or ``banner``.
        store: Asset store (defaults to the filesystem at ``settings['data_dir']``).
        rng: Random generator to draw from. Built from ``seed`` when omitted.
        seed: Seed for a fresh generator; a time-derived seed when omitted.
            Ignored when ``rng`` is given.
        settings: Loaded configuration (defaults to the built-in config).

    Raises:
        UnsupportedVariant: If ``variant`` is an unknown selector.
        GenerationError: Any selection, resolution or decode failure. No
            partial result is returned.
    """
    if isinstance(variant, str):
        variant = resolve_variant(variant)

    if store is None:
        settings = settings or config.DEFAULT_CONFIG
        store = FileSystemAssetStore(settings['data_dir'])

    if rng is None:
        seed = new_seed() if seed is None else seed
        rng = make_rng(seed)
    else:
        # An injected generator wins over any seed
        seed = None

    logger.debug(f'Generating {variant.name} ({variant.label or "no label"}) from {store!r}')

    choices = select_traits(variant, store, rng)
    layers = variant.reorder(choices)
    image = composite(variant.canvas_size, [choice.asset.path for choice in layers], store)
    attributes = assemble(choices, variant.label, variant.label_trait_type)

    return GenerationResult(image=image, attributes=attributes, choices=choices, seed=seed)


def generate_file(
    variant: VariantConfig | str,
    output_path: str | Path,
    store: Optional[AssetStore] = None,
    seed: Optional[int] = None,
    settings: Optional[dict[str, Any]] = None,
) -> tuple[Path, Path]:
    """Generate an image and write it plus its JSON metadata.

    The image is encoded in memory before anything touches the disk, so a
    failure leaves no partial artifact.

    Returns:
        Paths of the written image and metadata files.
    """
    settings = settings or config.DEFAULT_CONFIG
    output_path = Path(output_path)

    result = generate(variant, store=store, seed=seed, settings=settings)

    output_settings = settings.get('output', {})
    data = codec.encode(
        result.image,
        codec.format_for_path(output_path),
        quality=output_settings.get('jpeg_quality', codec.DEFAULT_JPEG_QUALITY),
    )

    token_id = count_existing_outputs(output_settings.get('count_dir', 'output'))
    record = build_record(result.attributes, token_id, settings.get('metadata'))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    logger.info(f'Wrote image: {output_path}')

    return output_path, write_metadata(output_path, record)


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure root logging for CLI runs."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = '%(asctime)s [%(levelname)s] %(message)s'
    log_handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        log_handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, format=log_format, handlers=log_handlers)


def run(
    selector: str,
    output_path: str = 'nft.png',
    config_path: Optional[str] = None,
    config_overrides: Optional[dict[str, Any]] = None,
    save_overrides: bool = False,
    seed: Optional[int] = None,
    debug: bool = False,
    log_file: Optional[str] = None,
) -> tuple[Path, Path]:
    """Run one generation end to end.

    Can be called programmatically or via CLI. Errors propagate to the caller.

    Args:
        selector: Variant selector (``male``, ``m``, ``female``, ``f``, ``banner``).
        output_path: Image path; the extension picks PNG, JPEG or GIF.
        config_path: Optional path to config file
        config_overrides: Optional dictionary of config overrides
        save_overrides: If True, save overrides back to config file
        seed: Optional fixed seed for reproducible output
        debug: Enable debug logging
        log_file: Optional path to log file
    """
    configure_logging(debug, log_file)

    variant = resolve_variant(selector)

    loaded_config, _ = config.load_config(
        config_path=config_path,
        overrides=config_overrides,
        save_overrides=save_overrides,
    )

    logger.info(f'nftgen generating {variant.name} -> {output_path}')
    return generate_file(variant, output_path, seed=seed, settings=loaded_config)
