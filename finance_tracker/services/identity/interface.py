"""
Abstract Identity Interface

The ledger never looks inside a credential. It hands the bearer token to
an IdentityVerifier and gets back the caller's uid (and email, if the
identity provider knows it) or an error.
"""

from abc import ABC, abstractmethod

from finance_tracker.models.user import VerifiedUser


class IdentityVerifier(ABC):
    """Verifies bearer credentials issued by an identity provider."""

    @abstractmethod
    async def verify(self, token: str) -> VerifiedUser:
        """
        Verify a bearer token.

        Args:
            token: The raw credential from the Authorization header

        Returns:
            The verified caller

        Raises:
            InvalidTokenError: If the token is malformed, expired or revoked
            IdentityUnavailableError: If the provider cannot be reached
        """
        pass


class IdentityError(Exception):
    """Base exception for identity verification."""
    pass


class InvalidTokenError(IdentityError):
    """The credential was rejected."""
    pass


class IdentityUnavailableError(IdentityError):
    """The identity provider could not be reached."""
    pass
