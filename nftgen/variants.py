"""Generator variants for nftgen.

A variant bundles everything that differs between the avatar and banner
generators: the ordered trait categories, the rarity table of each category,
the asset directories and the canvas size. The ordered category list is both
the selection order and the draw order.

Author:
    Jake Meador <jameador13@gmail.com>
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from . import rarity
from .catalog import Asset
from .errors import UnsupportedVariant
from .rarity import DependentRarityTable, RarityTable

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = [
    'CategorySpec',
    'TraitChoice',
    'VariantConfig',
    'static_order',
    'avatar_variant',
    'banner_variant',
    'resolve_variant',
    'VARIANT_ALIASES',
    'AVATAR_SIZE',
    'BANNER_SIZE',
]

AVATAR_SIZE = (4000, 4000)
BANNER_SIZE = (1500, 500)


@dataclass(frozen=True)
class CategorySpec:
    """One layer role in a variant.

    Attributes:
        key: Identifier used to reference this category as a parent.
        trait_type: Human-readable name written to metadata.
        directory: Store directory holding the category's assets. Dependent
            categories list ``<directory>/<parent asset stem>`` instead.
        table: Rarity table supplying the weights.
        parent: Key of the category this one depends on, if any.
    """
    key: str
    trait_type: str
    directory: str
    table: RarityTable | DependentRarityTable
    parent: Optional[str] = None

    @property
    def dependent(self) -> bool:
        return self.parent is not None


@dataclass(frozen=True)
class TraitChoice:
    """Result of selecting one category: the chosen label and its resolved asset."""
    category: CategorySpec
    label: str
    asset: Asset


def static_order(choices: Sequence[TraitChoice]) -> list[TraitChoice]:
    """Draw in category order."""
    return list(choices)


@dataclass(frozen=True)
class VariantConfig:
    """Everything the pipeline needs to generate one kind of image.

    Attributes:
        name: Variant identifier (``avatar`` or ``banner``).
        canvas_size: ``(width, height)`` of the output image.
        categories: Categories in selection and draw order.
        label: Value of the leading synthetic attribute, e.g. ``Male``.
        label_trait_type: Trait type of the leading synthetic attribute.
        reorder: Maps the chosen traits to draw order.
    """
    name: str
    canvas_size: tuple[int, int]
    categories: tuple[CategorySpec, ...]
    label: Optional[str] = None
    label_trait_type: str = 'Gender'
    reorder: Callable[[Sequence[TraitChoice]], list[TraitChoice]] = field(default=static_order, compare=False)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for category in self.categories:
            if category.parent is not None and category.parent not in seen:
                raise ValueError(
                    f'Category "{category.key}" depends on "{category.parent}", '
                    f'which is not declared before it'
                )
            if category.key in seen:
                raise ValueError(f'Duplicate category key: {category.key}')
            seen.add(category.key)


def _background_categories(root: str) -> tuple[CategorySpec, ...]:
    return (
        CategorySpec('composite_trait_one', 'Composite Trait One',
                     f'{root}/composite-trait-one', rarity.COMPOSITE_TRAIT_ONE),
        CategorySpec('composite_trait_two', 'Composite Trait Two',
                     f'{root}/composite-trait-two', rarity.COMPOSITE_TRAIT_TWO),
        CategorySpec('composite_trait_three', 'Composite Trait Three',
                     f'{root}/composite-trait-three', rarity.COMPOSITE_TRAIT_THREE,
                     parent='composite_trait_two'),
    )


def avatar_variant(gender: str) -> VariantConfig:
    """Build the square avatar variant for ``male`` or ``female``."""
    if gender not in ('male', 'female'):
        raise UnsupportedVariant(f'Unsupported gender: {gender}')

    return VariantConfig(
        name='avatar',
        canvas_size=AVATAR_SIZE,
        label=gender.title(),
        categories=_background_categories('backgrounds') + (
            CategorySpec('trait_one', 'Trait One',
                         f'{gender}/trait-one-options', rarity.TRAIT_ONE),
            CategorySpec('trait_one_dependent', 'Trait Two',
                         f'{gender}/trait-one-dependent', rarity.TRAIT_ONE_DEPENDENT,
                         parent='trait_one'),
            CategorySpec('trait_three', 'Trait Three',
                         f'{gender}/trait-three-options', rarity.TRAIT_THREE),
        ),
    )


def banner_variant() -> VariantConfig:
    """Build the wide banner variant (background layers only, no gender)."""
    return VariantConfig(
        name='banner',
        canvas_size=BANNER_SIZE,
        categories=_background_categories('banner'),
    )


# Selector -> factory
VARIANT_ALIASES: dict[str, Callable[[], VariantConfig]] = {
    'male': lambda: avatar_variant('male'),
    'm': lambda: avatar_variant('male'),
    'female': lambda: avatar_variant('female'),
    'f': lambda: avatar_variant('female'),
    'banner': banner_variant,
    'b': banner_variant,
}


def resolve_variant(selector: str) -> VariantConfig:
    """Map a CLI-style selector (``male``, ``f``, ``banner``...) to a variant.

    Raises:
        UnsupportedVariant: If the selector is not recognized.
    """
    factory = VARIANT_ALIASES.get(selector.strip().lower())
    if factory is None:
        raise UnsupportedVariant(
            f'Unsupported variant "{selector}" (expected one of: {", ".join(VARIANT_ALIASES)})'
        )
    return factory()
