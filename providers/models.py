"""
Purpose: Core data models for the providers domain.
What it does:
Defines the structure of a Provider and the ConsumerPolicy a pairing request
is evaluated against. Both are immutable snapshots owned by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, List, Optional


def _as_tag_set(value: Any) -> Optional[FrozenSet[str]]:
    """
    Collapse any iterable of tags into a frozenset. Returns None when `value`
    is not a collection of hashable tags (a bare string counts as malformed).
    """
    if isinstance(value, frozenset):
        return value
    if value is None or isinstance(value, (str, bytes)):
        return None
    try:
        return frozenset(value)
    except TypeError:
        return None


@dataclass(frozen=True)
class Provider:
    """
    A purely stateless representation of a service provider at a specific point in time.
    """
    address: str
    stake: int  # smallest network unit

    # ISO-3166 alpha-2 code, or "" when the provider did not declare one
    location: str = ""
    features: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # tags are a set: duplicates and ordering mean nothing
        features = frozenset() if self.features is None else _as_tag_set(self.features)
        if features is None:
            raise TypeError(f"Provider {self.address!r} features must be an iterable of tags, got {self.features!r}")
        object.__setattr__(self, "features", features)

    @classmethod
    def new(
        cls,
        address: str,
        stake: int,
        location: str = "",
        features: Optional[Iterable[str]] = None,
    ) -> Provider:
        return cls(
            address=address,
            stake=stake,
            location=location or "",
            features=frozenset(features or ()),
        )


@dataclass(frozen=True)
class ConsumerPolicy:
    """
    Eligibility parameters supplied by the consumer for a single pairing request.

    Empty values mean "no constraint".
    """
    required_location: str = ""
    required_features: FrozenSet[str] = field(default_factory=frozenset)
    min_stake: int = 0

    def __post_init__(self):
        # left as-is when malformed so problems() can report it
        required = _as_tag_set(self.required_features)
        if required is not None:
            object.__setattr__(self, "required_features", required)

    @classmethod
    def new(
        cls,
        required_location: str = "",
        required_features: Optional[Iterable[str]] = None,
        min_stake: int = 0,
    ) -> ConsumerPolicy:
        return cls(
            required_location=required_location,
            required_features=frozenset(required_features or ()),
            min_stake=min_stake,
        )

    def problems(self) -> List[str]:
        """
        Returns a list of structural problems. Empty list means valid.
        """
        errors: List[str] = []

        # bool is an int subclass but never a meaningful stake
        if isinstance(self.min_stake, bool) or not isinstance(self.min_stake, int):
            errors.append("min_stake must be an integer")
        elif self.min_stake < 0:
            errors.append(f"min_stake must be >= 0, got {self.min_stake}")

        if not isinstance(self.required_location, str):
            errors.append("required_location must be a string")
        elif self.required_location and not (
            len(self.required_location) == 2 and self.required_location.isalpha()
        ):
            errors.append(
                f"required_location must be empty or a two-letter country code, "
                f"got {self.required_location!r}"
            )

        if not isinstance(self.required_features, frozenset):
            errors.append(
                f"required_features must be a collection of feature tags, got {self.required_features!r}"
            )
            return errors

        for feature in self.required_features:
            if not isinstance(feature, str) or not feature.strip():
                errors.append(f"required feature {feature!r} must be a non-empty string")

        return errors

