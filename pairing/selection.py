"""
Purpose: Ranking rules for choosing the best providers.
What it does:
Accepts scored candidates and returns the top K by descending composite score.
Ties are broken by ascending provider address, so the same logical input
always yields the same order regardless of how the pool was ordered.
"""

import heapq
from typing import List, Sequence, Tuple

from .scoring import PairingScore

DEFAULT_TOP_K = 5


def ranking_key(score: PairingScore) -> Tuple:
    """
    Sort key, smallest first: best composite, then address ascending.
    The trailing fields only separate duplicate addresses.
    """
    provider = score.provider
    return (
        -score.composite,
        provider.address,
        -provider.stake,
        provider.location,
        tuple(sorted(provider.features)),
    )


def select_top_k(scored: Sequence[PairingScore], k: int = DEFAULT_TOP_K) -> List[PairingScore]:
    """
    Bounded selection in O(N log K). Never pads: fewer than K inputs come back whole, ranked.
    """
    if k < 1:
        raise ValueError("k must be >= 1")

    return heapq.nsmallest(k, scored, key=ranking_key)


def rank_order(scored: Sequence[PairingScore]) -> List[PairingScore]:
    """
    Full deterministic ordering, for callers that want every candidate ranked.
    """
    return sorted(scored, key=ranking_key)
