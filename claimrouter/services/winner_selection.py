"""
Winner Selection Service

Picks a single partner out of a routing result.

- highest_score: the maximum-score entry. The input is re-sorted since callers may
  pass an unsorted list; ties keep input order.
- weighted_random: probability proportional to score. Zero-score entries are never
  chosen.

The random source is injected. Anything with a ``random()`` method returning a float
in [0, 1) works: ``random.Random``, ``numpy.random.Generator`` or a scripted fake.
"""

from typing import Optional, Protocol, Sequence

import numpy as np

from claimrouter.core.config import get_settings
from claimrouter.models.enums import SelectionMode
from claimrouter.models.schemas import RoutingResult


class RandomSource(Protocol):
    def random(self) -> float:
        ...


def default_random_source() -> np.random.Generator:
    return np.random.default_rng(get_settings().random_seed)


def pick_highest_score(eligible: Sequence[RoutingResult]) -> Optional[RoutingResult]:
    if not eligible:
        return None
    return sorted(eligible, key=lambda r: r.matchScore, reverse=True)[0]


def pick_weighted_random(
    eligible: Sequence[RoutingResult],
    rng: RandomSource,
) -> Optional[RoutingResult]:
    """
    Score-proportional draw.

    Walks the list in input order subtracting each score from the draw until it is
    used up. Falls back to the first entry when floating point drift leaves a
    positive residue or every score is zero.
    """
    if not eligible:
        return None

    total = sum(r.matchScore for r in eligible)
    remaining = float(rng.random()) * total

    for result in eligible:
        if result.matchScore <= 0:
            continue
        remaining -= result.matchScore
        if remaining <= 0:
            return result

    return eligible[0]


def select_winning_partner(
    eligible: Sequence[RoutingResult],
    mode: SelectionMode = SelectionMode.HIGHEST_SCORE,
    rng: Optional[RandomSource] = None,
) -> Optional[RoutingResult]:
    """
    Select the winning partner.

    Args:
        eligible: Ranked or unranked routing results
        mode: Selection strategy
        rng: Random source for weighted_random. Defaults to a numpy generator
            seeded from the configured random_seed.

    Returns:
        The winning RoutingResult, or None when there are no candidates
    """
    if not eligible:
        return None

    if SelectionMode(mode) == SelectionMode.HIGHEST_SCORE:
        return pick_highest_score(eligible)

    if rng is None:
        rng = default_random_source()
    return pick_weighted_random(eligible, rng)
