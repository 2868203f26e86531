"""
Firebase Authentication Verifier

Verifies Firebase ID tokens with the Admin SDK. verify_id_token is a
blocking call (it may fetch Google's public signing keys), so it runs in
a worker thread to keep the event loop free.
"""

import asyncio

from firebase_admin import App, auth

from finance_tracker.models.user import VerifiedUser
from finance_tracker.services.identity.interface import (
    IdentityUnavailableError,
    IdentityVerifier,
    InvalidTokenError,
)


class FirebaseIdentityVerifier(IdentityVerifier):
    """IdentityVerifier backed by firebase_admin.auth."""

    def __init__(self, app: App):
        self._app = app

    async def verify(self, token: str) -> VerifiedUser:
        try:
            decoded = await asyncio.to_thread(auth.verify_id_token, token, app=self._app)
        except auth.CertificateFetchError as e:
            raise IdentityUnavailableError(f"Could not fetch signing certificates: {e}") from e
        except (auth.InvalidIdTokenError, auth.UserDisabledError, ValueError) as e:
            raise InvalidTokenError(str(e)) from e

        return VerifiedUser(uid=decoded["uid"], email=decoded.get("email"))
