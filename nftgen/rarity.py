"""Rarity tables for nftgen traits.

Each category has a fixed, ordered set of weighted options. Dependent
categories are keyed additionally by the label chosen for their parent
category. Selection probability is proportional to weight among the listed
options.

Author:
    Jake Meador <jameador13@gmail.com>
"""

from dataclasses import dataclass
from typing import Iterable, Optional

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = [
    'LEGENDARY',
    'EPIC',
    'RARE',
    'UNCOMMON',
    'COMMON',
    'WeightedOption',
    'RarityTable',
    'DependentRarityTable',
    'weighted',
    'probabilities',
]

# Rarity tiers, rarest to commonest
LEGENDARY = 1
EPIC = 2
RARE = 3
UNCOMMON = 5
COMMON = 10


@dataclass(frozen=True)
class WeightedOption:
    """A trait label with its relative selection weight."""
    label: str
    weight: int

    def __post_init__(self) -> None:
        if not isinstance(self.weight, int) or isinstance(self.weight, bool) or self.weight <= 0:
            raise ValueError(f'Weight for "{self.label}" must be a positive integer, got {self.weight!r}')


def weighted(*pairs: tuple[str, int]) -> tuple[WeightedOption, ...]:
    """Build an ordered option tuple from ``(label, weight)`` pairs."""
    return tuple(WeightedOption(label, weight) for label, weight in pairs)


class RarityTable:
    """Fixed option set for an independent category."""

    dependent = False

    def __init__(self, options: Iterable[WeightedOption]) -> None:
        self.options = tuple(options)

    def options_for(self, parent_label: Optional[str] = None) -> tuple[WeightedOption, ...]:
        return self.options

    def __repr__(self) -> str:
        return f'RarityTable({list(self.options)!r})'


class DependentRarityTable:
    """Option sets keyed by the label chosen for the parent category.

    An unmapped parent label yields an empty option set; there is no fallback.
    """

    dependent = True

    def __init__(self, mapping: dict[str, Iterable[WeightedOption]]) -> None:
        self.mapping = {parent: tuple(options) for parent, options in mapping.items()}

    def options_for(self, parent_label: Optional[str] = None) -> tuple[WeightedOption, ...]:
        if parent_label is None:
            return ()
        return self.mapping.get(parent_label, ())

    def __repr__(self) -> str:
        return f'DependentRarityTable({sorted(self.mapping)!r})'


def probabilities(options: Iterable[WeightedOption]) -> list[tuple[str, float]]:
    """Return each option's selection probability, in declaration order."""
    options = list(options)
    total = sum(option.weight for option in options)
    if not total:
        return []
    return [(option.label, option.weight / total) for option in options]


# ============================================================================
# Built-in Tables
# ============================================================================

COMPOSITE_TRAIT_ONE = RarityTable(weighted(
    ('Option 1', EPIC),
    ('Option 2', COMMON),
    ('Option 3', RARE),
    ('Option 4', COMMON),
    ('Option 5', RARE),
    ('Option 6', COMMON),
    ('Option 7', COMMON),
))

COMPOSITE_TRAIT_TWO = RarityTable(weighted(
    ('Option 1', COMMON),
    ('Option 2', COMMON),
    ('Option 3', COMMON),
))

COMPOSITE_TRAIT_THREE = DependentRarityTable({
    'Option 1': weighted(('Option 1a', COMMON), ('Option 1b', COMMON), ('Option 1c', COMMON)),
    'Option 2': weighted(('Option 2a', COMMON), ('Option 2b', COMMON), ('Option 2c', COMMON)),
    'Option 3': weighted(('Option 3a', COMMON), ('Option 3b', COMMON), ('Option 3c', COMMON)),
})

TRAIT_ONE = RarityTable(weighted(
    ('Option 1', RARE),
    ('Option 2', UNCOMMON),
    ('Option 3', EPIC),
    ('Option 4', COMMON),
    ('Option 5', UNCOMMON),
    ('Option 6', COMMON),
    ('Option 7', UNCOMMON),
))

TRAIT_ONE_DEPENDENT = DependentRarityTable({
    f'Option {n}': weighted(
        (f'Option {n}a', COMMON),
        (f'Option {n}b', COMMON),
        (f'Option {n}c', COMMON),
    )
    for n in range(1, 8)
})

TRAIT_THREE = RarityTable(weighted(
    ('Trait Three Option 1', COMMON),
    ('Trait Three Option 2', UNCOMMON),
    ('Trait Three Option 3', UNCOMMON),
    ('Trait Three Option 4', RARE),
    ('Trait Three Option 5', COMMON),
    ('Trait Three Option 6', COMMON),
    ('Trait Three Option 7', LEGENDARY),
    ('Trait Three Option 8', LEGENDARY),
    ('Trait Three Option 9', EPIC),
))
