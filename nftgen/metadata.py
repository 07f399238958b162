"""Metadata assembly and persistence for nftgen.

Turns a chosen trait chain into the ordered attribute list and writes the
collection-style JSON record next to the generated image.

Usage:
    attributes = assemble(choices, variant_label='Male')
    record = build_record(attributes, token_id=count_existing_outputs('output'))
    write_metadata('output/nft.png', record)

Author:
    Jake Meador <jameador13@gmail.com>
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from . import config
from .catalog import format_property
from .variants import TraitChoice

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = [
    'Attribute',
    'assemble',
    'build_record',
    'metadata_path',
    'write_metadata',
    'count_existing_outputs',
    'DEFAULT_METADATA',
]

logger = logging.getLogger('nftgen.metadata')

DEFAULT_METADATA = config.DEFAULT_CONFIG['metadata']


@dataclass(frozen=True)
class Attribute:
    """One ``{trait_type, value}`` metadata entry."""
    trait_type: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def assemble(
    choices: Iterable[TraitChoice],
    variant_label: Optional[str] = None,
    variant_trait_type: str = 'Gender',
) -> list[Attribute]:
    """Build the attribute list for a trait chain.

    Args:
        choices: Trait choices in category order.
        variant_label: Value of the leading variant attribute (e.g. ``Male``);
            omitted when None.
        variant_trait_type: Trait type of the leading variant attribute.

    Returns:
        One attribute per choice, in order, after the optional variant record.
    """
    attributes = []
    if variant_label is not None:
        attributes.append(Attribute(variant_trait_type, variant_label))

    for choice in choices:
        attributes.append(Attribute(choice.category.trait_type, format_property(choice.label)))

    return attributes


def count_existing_outputs(directory: str | Path) -> int:
    """Return 1 + the number of PNG files in ``directory``.

    Used only to number output tokens, so failures are logged and the count
    falls back to 1.
    """
    try:
        return 1 + sum(
            1 for entry in Path(directory).iterdir()
            if entry.is_file() and entry.suffix == '.png'
        )
    except OSError as e:
        logger.warning(f'Could not find file count in {directory}: {e}')
        return 1


def build_record(
    attributes: Iterable[Attribute],
    token_id: int,
    settings: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Build the JSON-ready metadata record.

    Args:
        attributes: Assembled attributes in order.
        token_id: Number used for ``id`` and in the name template.
        settings: ``metadata`` config section (name template, image, description).
    """
    settings = {**DEFAULT_METADATA, **(settings or {})}
    return {
        'id': str(token_id),
        'name': settings['name'].replace('{id}', str(token_id)),
        'attributes': [attribute.to_dict() for attribute in attributes],
        'image': settings['image'],
        'description': settings['description'],
    }


def metadata_path(image_path: str | Path) -> Path:
    """Return the metadata path for an image: same location, ``.json`` extension."""
    return Path(image_path).with_suffix('.json')


def write_metadata(image_path: str | Path, record: dict[str, Any]) -> Path:
    """Write ``record`` next to ``image_path`` and return the JSON path."""
    path = metadata_path(image_path)
    path.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding='utf-8')
    logger.info(f'Wrote metadata: {path}')
    return path
