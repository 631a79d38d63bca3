"""
Purpose: Score eligible providers (the "how good is each one" layer).
What it does:

Aggregate pass (once per request, over the whole filtered pool):

max_stake = max(stake)

Per-candidate pass:

stake = stake / max_stake (0.0 for everyone when max_stake == 0)

features = |features - required| / |features| (0.0 with no features)

location = 1.0 when matched or unconstrained, mismatch score otherwise (SOFT mode only)

composite = weighted sum, clamped to [0, 1]

Large pools fan the per-candidate pass out over index ranges. The aggregate is
fully computed before any worker starts and chunks are joined in range order.

Rule: Scoring produces one score per candidate; it does not order or truncate.
"""

# pairing/scoring.py

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from providers.models import ConsumerPolicy, Provider
from .errors import NoEligibleProviders
from .policy import PairingPolicy, default_pairing_policy

logger = logging.getLogger(__name__)

STAKE = "stake"
FEATURES = "features"
LOCATION = "location"


@dataclass(frozen=True)
class PairingScore:
    """
    Composite score (and its components) for one eligible provider.
    """
    provider: Provider
    composite: float
    # excluded from the hash so scores can sit in sets and dict keys
    components: Dict[str, float] = field(hash=False)

    @property
    def address(self) -> str:
        return self.provider.address


@dataclass(frozen=True)
class PoolAggregates:
    """
    Pool-wide normalizers for a single request. Never shared between requests.
    """
    max_stake: int

    @classmethod
    def from_candidates(cls, candidates: Sequence[Provider]) -> PoolAggregates:
        if not candidates:
            raise NoEligibleProviders("cannot aggregate an empty candidate pool", pool_size=0)
        return cls(max_stake=max(c.stake for c in candidates))


def score_candidates(
    candidates: Sequence[Provider],
    policy: ConsumerPolicy,
    *,
    pairing_policy: Optional[PairingPolicy] = None,
) -> List[PairingScore]:
    """
    Score every candidate against the consumer policy.

    Inputs:
      - candidates: the filtered pool (must be non-empty).
      - policy: the consumer policy the pool was filtered with.
      - pairing_policy: weights, location mode and parallelism knobs.

    Output:
      - one PairingScore per candidate, in candidate order (callers must not
        rely on that order; ranking is selection.py's job).
    """
    pairing_policy = pairing_policy or default_pairing_policy()

    # 1) Aggregate pass: barrier before any per-candidate work
    aggregates = PoolAggregates.from_candidates(candidates)

    # 2) Per-candidate pass
    if len(candidates) < pairing_policy.parallel_threshold or pairing_policy.max_workers == 1:
        return _score_range(candidates, policy, aggregates, pairing_policy)

    return _score_parallel(candidates, policy, aggregates, pairing_policy)


def score_provider(
    provider: Provider,
    policy: ConsumerPolicy,
    aggregates: PoolAggregates,
    pairing_policy: PairingPolicy,
) -> PairingScore:
    components = {
        STAKE: stake_score(provider, aggregates),
        FEATURES: feature_score(provider, policy),
        LOCATION: location_score(provider, policy, pairing_policy),
    }

    composite = (
        pairing_policy.stake_weight * components[STAKE]
        + pairing_policy.feature_weight * components[FEATURES]
        + pairing_policy.location_weight * components[LOCATION]
    )

    return PairingScore(
        provider=provider,
        composite=_clamp(composite),
        components=components,
    )


# -------------------------
# Component scores
# -------------------------

def stake_score(provider: Provider, aggregates: PoolAggregates) -> float:
    if aggregates.max_stake <= 0:
        return 0.0
    return _clamp(provider.stake / aggregates.max_stake)


def feature_score(provider: Provider, policy: ConsumerPolicy) -> float:
    """
    Share of the provider's capabilities beyond what the consumer asked for.
    """
    if not provider.features:
        return 0.0
    extra = provider.features - policy.required_features
    return _clamp(len(extra) / len(provider.features))


def location_score(provider: Provider, policy: ConsumerPolicy, pairing_policy: PairingPolicy) -> float:
    if not policy.required_location or provider.location == policy.required_location:
        return 1.0
    # HARD mode never gets here: the filter already dropped the mismatch.
    return pairing_policy.location_mismatch_score


# -------------------------
# Fan-out helpers
# -------------------------

def _score_range(
    candidates: Sequence[Provider],
    policy: ConsumerPolicy,
    aggregates: PoolAggregates,
    pairing_policy: PairingPolicy,
) -> List[PairingScore]:
    return [score_provider(c, policy, aggregates, pairing_policy) for c in candidates]


def _score_parallel(
    candidates: Sequence[Provider],
    policy: ConsumerPolicy,
    aggregates: PoolAggregates,
    pairing_policy: PairingPolicy,
) -> List[PairingScore]:
    """
    Fork-join over contiguous index ranges. Each worker builds its own list;
    executor.map yields them in submission order so the join is order-stable.
    """
    workers = min(pairing_policy.max_workers, len(candidates))
    chunk_size = -(-len(candidates) // workers)  # ceil
    chunks = [candidates[i:i + chunk_size] for i in range(0, len(candidates), chunk_size)]

    logger.debug("Scoring %d candidates across %d chunks", len(candidates), len(chunks))

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pairing_score_") as executor:
        partials = executor.map(
            lambda chunk: _score_range(chunk, policy, aggregates, pairing_policy),
            chunks,
        )
        scores: List[PairingScore] = []
        for partial in partials:
            scores.extend(partial)

    return scores


def _clamp(value: float) -> float:
    # absorbs floating-point drift around the [0, 1] bounds
    return min(1.0, max(0.0, value))
