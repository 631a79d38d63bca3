"""
Purpose: The pairing "orchestrator" (single entry point).
What it does:

Coordinates the pipeline end-to-end for one pairing request:

- validates the consumer policy

- filters the provider pool (candidate_filter.py)

- scores every eligible provider (scoring.py)

- selects the top K (selection.py)

Public functions:

- filter_providers(providers, policy) -> List[Provider]
- rank_providers(providers, policy) -> List[PairingScore]   (unordered, full detail)
- get_pairing_list(providers, policy) -> (List[Provider], Optional[PairingError])

Rule: Engine is the only file other modules should call directly for pairing.
Every call owns its intermediates, so concurrent calls need no locking.
"""

# pairing/engine.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from providers.models import ConsumerPolicy, Provider
from .candidate_filter import filter_eligible_providers
from .errors import InvalidPolicy, NoEligibleProviders, NoProviders, PairingError
from .policy import PairingPolicy, default_pairing_policy
from .scoring import PairingScore, score_candidates
from .selection import select_top_k

logger = logging.getLogger(__name__)


def filter_providers(
    providers: Sequence[Provider],
    policy: ConsumerPolicy,
    *,
    pairing_policy: Optional[PairingPolicy] = None,
) -> List[Provider]:
    """
    Eligible subset of `providers`, in input order.

    Raises InvalidPolicy if the consumer policy is malformed.
    """
    pairing_policy = _resolve(pairing_policy)
    _check_policy(policy)

    return filter_eligible_providers(providers, policy, location_mode=pairing_policy.location_mode)


def rank_providers(
    providers: Sequence[Provider],
    policy: ConsumerPolicy,
    *,
    pairing_policy: Optional[PairingPolicy] = None,
) -> List[PairingScore]:
    """
    One PairingScore per eligible provider, no truncation and no ordering guarantee.
    Returns an empty list when nothing is eligible.

    Raises InvalidPolicy if the consumer policy is malformed.
    """
    pairing_policy = _resolve(pairing_policy)
    candidates = filter_providers(providers, policy, pairing_policy=pairing_policy)
    if not candidates:
        return []

    return score_candidates(candidates, policy, pairing_policy=pairing_policy)


def get_pairing_list(
    providers: Sequence[Provider],
    policy: ConsumerPolicy,
    *,
    pairing_policy: Optional[PairingPolicy] = None,
) -> Tuple[List[Provider], Optional[PairingError]]:
    """
    Main pairing entry point (pure algorithm).

    Returns the top-K providers (K = pairing_policy.top_k, 5 by default) and
    None, or an empty list and the terminal error. Errors are returned, never raised:

      - NoProviders: the pool was empty (checked before anything else)
      - InvalidPolicy: the consumer policy is malformed (checked before filtering)
      - NoEligibleProviders: filtering removed every provider

    Fewer than K eligible providers is a normal, successful result.
    """
    pairing_policy = _resolve(pairing_policy)

    if not providers:
        logger.info("Pairing rejected: %s", NoProviders.code)
        return [], NoProviders()

    problems = policy.problems()
    if problems:
        logger.info("Pairing rejected: %s (%s)", InvalidPolicy.code, "; ".join(problems))
        return [], InvalidPolicy(problems)

    # 1) Filter
    candidates = filter_eligible_providers(providers, policy, location_mode=pairing_policy.location_mode)
    if not candidates:
        logger.info("Pairing rejected: %s (pool_size=%d)", NoEligibleProviders.code, len(providers))
        return [], NoEligibleProviders(pool_size=len(providers))

    # 2) Score
    scored = score_candidates(candidates, policy, pairing_policy=pairing_policy)

    # 3) Select
    top = select_top_k(scored, k=pairing_policy.top_k)

    logger.debug(
        "Paired %d of %d eligible providers (pool_size=%d)",
        len(top), len(candidates), len(providers),
    )
    return [s.provider for s in top], None


def _check_policy(policy: ConsumerPolicy) -> None:
    problems = policy.problems()
    if problems:
        raise InvalidPolicy(problems)


def _resolve(pairing_policy: Optional[PairingPolicy]) -> PairingPolicy:
    if pairing_policy is None:
        return default_pairing_policy()
    pairing_policy.validate()
    return pairing_policy
