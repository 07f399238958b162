"""Weighted trait selection for nftgen.

Randomness comes from an explicit ``random.Random`` handle created per
generation call, so tests can fix the seed and concurrent generations never
share generator state. This is not cryptographically secure.

Author:
    Jake Meador <jameador13@gmail.com>
"""

import hashlib
import logging
import random
import time
from typing import Iterable, Optional

from .errors import NoOptionsAvailable
from .rarity import WeightedOption

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = ['select_category', 'random_filler', 'new_seed', 'make_rng']

logger = logging.getLogger('nftgen.selector')

FILLER_CHARSET = 'abcdedfghijklmnopqrstABCDEFGHIJKLMNOP£'
FILLER_LENGTH = 20


def select_category(options: Iterable[WeightedOption], rng: random.Random) -> str:
    """Draw one label with probability proportional to its weight.

    Args:
        options: Weighted options in table-declaration order.
        rng: Random generator for this generation call.

    Returns:
        The chosen label.

    Raises:
        NoOptionsAvailable: If ``options`` is empty.
    """
    options = list(options)
    if not options:
        raise NoOptionsAvailable('Cannot select from an empty option set')

    total = sum(option.weight for option in options)
    draw = rng.randrange(total)

    cumulative = 0
    for option in options:
        cumulative += option.weight
        if cumulative > draw:
            return option.label

    # Unreachable while every weight is positive
    raise NoOptionsAvailable(f'Draw {draw} exceeded total weight {total}')


def random_filler(rng: Optional[random.Random] = None) -> str:
    """Generate a throwaway string used to decorrelate rapid reseeds."""
    rng = rng or random.Random()
    return ''.join(rng.choices(FILLER_CHARSET, k=FILLER_LENGTH))


def new_seed() -> int:
    """Derive a seed from the wall clock and a hash of a random filler string."""
    digest = hashlib.md5(random_filler().encode('utf-8')).hexdigest()[:8]
    return time.time_ns() ^ int(digest, 16)


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create the random generator for one generation call."""
    if seed is None:
        seed = new_seed()
    logger.debug(f'Random seed: {seed}')
    return random.Random(seed)
