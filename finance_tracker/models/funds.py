"""
Savings Fund Models

Each user has exactly one funds document holding two fixed funds:
emergency and vacation.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


FUND_NAMES = ("emergency", "vacation")


class Fund(BaseModel):
    """A savings goal with a target and a current balance."""
    enabled: bool = False
    target: float = 0
    current: float = 0


def default_fund() -> dict[str, Any]:
    return Fund().model_dump()


class FundIn(Fund):
    """
    Fund sub-record as sent by the client.

    Fields are coerced, never rejected: enabled by truthiness, and
    amounts that are missing, blank, non-numeric or not finite count as 0.
    """
    model_config = ConfigDict(extra="ignore")

    @field_validator("enabled", mode="before")
    @classmethod
    def truthy_is_enabled(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("target", "current", mode="before")
    @classmethod
    def unusable_is_zero(cls, v: Any) -> float:
        try:
            number = float(v)
        except (TypeError, ValueError):
            return 0
        return number if math.isfinite(number) else 0


class FundsUpdate(BaseModel):
    """Partial funds body: either fund may be omitted."""
    model_config = ConfigDict(extra="ignore")

    emergency: Optional[FundIn] = None
    vacation: Optional[FundIn] = None
