"""Authenticated caller."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


DEFAULT_DISPLAY_NAME = "Me"


class VerifiedUser(BaseModel):
    """
    Identity returned by the identity verifier.

    uid is the owner identifier stamped on every document.
    """
    model_config = ConfigDict(frozen=True)

    uid: str
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Default value for person / paidBy / owner fields."""
        return self.email or DEFAULT_DISPLAY_NAME
