"""Identity verification package."""

from finance_tracker.services.identity.interface import (
    IdentityError,
    IdentityUnavailableError,
    IdentityVerifier,
    InvalidTokenError,
)

__all__ = [
    "IdentityError",
    "IdentityUnavailableError",
    "IdentityVerifier",
    "InvalidTokenError",
]
