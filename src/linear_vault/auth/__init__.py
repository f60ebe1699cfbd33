"""
Authentication data for linear-vault.
Provides the OAuth token envelope kept in the credential store.
"""

from .token import TokenInfo

__all__ = [
    "TokenInfo",
]
