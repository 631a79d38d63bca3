#Purpose: Hard eligibility filtering (rule gates).
#Builds the base candidate set before scoring.
#Typical responsibilities:
#location match (skipped when location is a soft preference)
#required capability tags
#minimum stake
#Output: "rule-qualified providers" (still not ranked).

from typing import List, Sequence

from providers.models import ConsumerPolicy, Provider
from .policy import LocationMode


def matches_location(provider: Provider, policy: ConsumerPolicy) -> bool:
    # exact, case-sensitive
    return not policy.required_location or provider.location == policy.required_location


def has_required_features(provider: Provider, policy: ConsumerPolicy) -> bool:
    return provider.features >= policy.required_features


def meets_min_stake(provider: Provider, policy: ConsumerPolicy) -> bool:
    return provider.stake >= policy.min_stake


def filter_eligible_providers(
    providers: Sequence[Provider],
    policy: ConsumerPolicy,
    *,
    location_mode: LocationMode = LocationMode.HARD,
) -> List[Provider]:
    """
    Returns only providers that pass every predicate, in input order.
    A provider failing any predicate is dropped without a reason.
    """
    check_location = location_mode == LocationMode.HARD
    eligible = []

    for provider in providers:
        if check_location and not matches_location(provider, policy):
            continue

        if not has_required_features(provider, policy):
            continue

        if not meets_min_stake(provider, policy):
            continue

        eligible.append(provider)

    return eligible
