"""
Purpose: Central configuration for the pairing engine (single source of truth).
What it does:

Stores all tunable thresholds/weights:

TOP_K = 5

STAKE_WEIGHT = 0.5, FEATURE_WEIGHT = 0.3, LOCATION_WEIGHT = 0.2

LOCATION_MODE = HARD (filter) | SOFT (score only)

PARALLEL_THRESHOLD = 4096 candidates before the scoring pass fans out

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dotenv import load_dotenv


class LocationMode(str, Enum):
    """
    How a consumer's required location is enforced.

    HARD: the filter drops providers in other locations, so every scored
          candidate gets LocationScore 1.0.
    SOFT: the filter ignores location; mismatching providers are kept and
          scored with `location_mismatch_score`.
    """
    HARD = "hard"
    SOFT = "soft"


@dataclass(frozen=True)
class PairingPolicy:
    """
    Central configuration for provider pairing.

    Keep all pairing tunables here so behavior can be tuned without
    touching the stages (candidate_filter/scoring/selection).

    Notes:
    - composite = stake_weight * stake + feature_weight * features + location_weight * location
      The three weights must sum to 1.0 so the composite stays in [0, 1].
    - Frozen, so one instance can be shared by every concurrent request.
    """

    # --- Selection ---
    top_k: int = 5

    # --- Composite weights ---
    stake_weight: float = 0.5
    feature_weight: float = 0.3
    location_weight: float = 0.2

    # --- Location handling ---
    location_mode: LocationMode = LocationMode.HARD
    # Only reachable in SOFT mode.
    location_mismatch_score: float = 0.5

    # --- Performance ---
    # Below this pool size the per-candidate pass runs inline.
    parallel_threshold: int = 4096
    max_workers: int = 4

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.top_k < 1:
            raise ValueError("top_k must be >= 1")

        weights = (self.stake_weight, self.feature_weight, self.location_weight)
        if any(w < 0 for w in weights):
            raise ValueError("composite weights must be >= 0")

        if abs(sum(weights) - 1.0) > 1e-9:
            raise ValueError(f"composite weights must sum to 1.0, got {sum(weights)}")

        if not 0.0 <= self.location_mismatch_score <= 1.0:
            raise ValueError("location_mismatch_score must be within [0, 1]")

        if self.parallel_threshold < 1:
            raise ValueError("parallel_threshold must be >= 1")

        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")


def default_pairing_policy() -> PairingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = PairingPolicy()
    p.validate()
    return p


def pairing_policy_from_env(env_file: Optional[str] = None) -> PairingPolicy:
    """
    Build a policy from PAIRING_* environment variables (a .env file is loaded first).

    Example in .env:
    PAIRING_TOP_K=5
    PAIRING_LOCATION_MODE=soft
    """
    load_dotenv(dotenv_path=env_file)
    defaults = PairingPolicy()

    def _get(name: str, cast, fallback):
        raw = os.getenv(f"PAIRING_{name}")
        if raw is None or raw.strip() == "":
            return fallback
        try:
            return cast(raw.strip())
        except ValueError as e:
            raise ValueError(f"PAIRING_{name} has an invalid value: {raw!r}") from e

    p = PairingPolicy(
        top_k=_get("TOP_K", int, defaults.top_k),
        stake_weight=_get("STAKE_WEIGHT", float, defaults.stake_weight),
        feature_weight=_get("FEATURE_WEIGHT", float, defaults.feature_weight),
        location_weight=_get("LOCATION_WEIGHT", float, defaults.location_weight),
        location_mode=_get("LOCATION_MODE", lambda v: LocationMode(v.lower()), defaults.location_mode),
        location_mismatch_score=_get("LOCATION_MISMATCH_SCORE", float, defaults.location_mismatch_score),
        parallel_threshold=_get("PARALLEL_THRESHOLD", int, defaults.parallel_threshold),
        max_workers=_get("MAX_WORKERS", int, defaults.max_workers),
    )
    p.validate()
    return p
