"""
Purpose: Terminal conditions of a pairing request.
What it does:
Defines the error taxonomy returned by the orchestrator. These are ordinary
values for get_pairing_list; they are only raised by the lower-level stages
when a caller bypasses the orchestrator's guards.
"""

from typing import Iterable, List, Optional


class PairingError(Exception):
    """Base class for every pairing failure. `code` is stable for callers/logs."""
    code = "pairing_error"


class NoProviders(PairingError):
    """Raised when the input provider pool was empty."""
    code = "no_providers"

    def __init__(self, message: str = "no providers supplied"):
        super().__init__(message)


class NoEligibleProviders(PairingError):
    """Raised when filtering removed every candidate from a non-empty pool."""
    code = "no_eligible_providers"

    def __init__(self, message: str = "no eligible providers", pool_size: Optional[int] = None):
        super().__init__(message)
        self.pool_size = pool_size


class InvalidPolicy(PairingError, ValueError):
    """Raised when the consumer policy is structurally invalid."""
    code = "invalid_policy"

    def __init__(self, problems: Iterable[str]):
        self.problems: List[str] = list(problems)
        super().__init__("invalid consumer policy: " + "; ".join(self.problems))
