"""
Providers domain package.

Public API:
- Domain models: Provider, ConsumerPolicy
"""
from .models import Provider, ConsumerPolicy

__all__ = [
    "Provider",
    "ConsumerPolicy",
]
