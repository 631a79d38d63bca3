"""
Pairing subpackage.

Public API:
- filter_providers, rank_providers, get_pairing_list
- PairingScore
- PairingPolicy, LocationMode
- PairingError, NoProviders, NoEligibleProviders, InvalidPolicy
"""

from .engine import filter_providers, rank_providers, get_pairing_list
from .errors import PairingError, NoProviders, NoEligibleProviders, InvalidPolicy
from .policy import PairingPolicy, LocationMode, default_pairing_policy, pairing_policy_from_env
from .scoring import PairingScore

__all__ = [
    "filter_providers",
    "rank_providers",
    "get_pairing_list",
    "PairingScore",
    "PairingPolicy",
    "LocationMode",
    "default_pairing_policy",
    "pairing_policy_from_env",
    "PairingError",
    "NoProviders",
    "NoEligibleProviders",
    "InvalidPolicy",
]
