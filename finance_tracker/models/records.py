"""
Ledger Record Models

These models describe what the client may send when creating a record
and how that input turns into a stored document.

DESIGN DECISION: Input is loosely typed (the client sends numbers as
strings from form fields), so we run pydantic in lax mode. Numeric
strings are coerced; anything that cannot become a finite number is
rejected instead of being stored as NaN.

Field names on the wire and in storage are camelCase to match the client.
"""

from abc import abstractmethod
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from finance_tracker.models.user import VerifiedUser


OWNER_FIELD = "userId"


class RecordKind(str, Enum):
    """
    Transactional collections.

    The enum value is the collection name in the document store
    and the key used in aggregate responses.
    """
    SALARIES = "salaries"
    EXPENSES = "expenses"
    INVESTMENTS = "investments"
    ACTIVITIES = "activities"


class LedgerInput(BaseModel):
    """Shared config for request bodies."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class TransactionIn(LedgerInput):
    """
    Fields common to every transactional record.

    month is deliberately not range-checked; out-of-range values are
    stored as sent. Text fields are never required: missing or null
    text is stored as an empty string.
    """
    amount: float = Field(..., allow_inf_nan=False)
    date: str = ""
    month: int
    year: int

    @field_validator("date", "title", "category", "type", mode="before", check_fields=False)
    @classmethod
    def null_text_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @abstractmethod
    def to_document(self, caller: VerifiedUser) -> dict[str, Any]:
        """Stored document for this record, owned by the caller."""

    def _window(self) -> dict[str, Any]:
        return {"date": self.date, "month": self.month, "year": self.year}


class SalaryIn(TransactionIn):
    person: Optional[str] = None

    def to_document(self, caller: VerifiedUser) -> dict[str, Any]:
        return {
            OWNER_FIELD: caller.uid,
            "person": self.person or caller.display_name,
            "amount": self.amount,
            **self._window(),
        }


class ExpenseIn(TransactionIn):
    title: str = ""
    category: str = ""
    paid_by: Optional[str] = None
    notes: Optional[str] = None

    def to_document(self, caller: VerifiedUser) -> dict[str, Any]:
        return {
            OWNER_FIELD: caller.uid,
            "title": self.title,
            "amount": self.amount,
            "category": self.category,
            "paidBy": self.paid_by or caller.display_name,
            **self._window(),
            "notes": self.notes or "",
        }


class InvestmentIn(TransactionIn):
    type: str = ""
    owner: Optional[str] = None
    return_percent: Optional[float] = Field(default=None, allow_inf_nan=False)
    notes: Optional[str] = None

    @field_validator("return_percent", mode="before")
    @classmethod
    def blank_is_null(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_document(self, caller: VerifiedUser) -> dict[str, Any]:
        return {
            OWNER_FIELD: caller.uid,
            "type": self.type,
            "amount": self.amount,
            "owner": self.owner or caller.display_name,
            **self._window(),
            "returnPercent": self.return_percent,
            "notes": self.notes or "",
        }


class ActivityIn(TransactionIn):
    title: str = ""
    type: str = ""
    person: Optional[str] = None
    notes: Optional[str] = None

    def to_document(self, caller: VerifiedUser) -> dict[str, Any]:
        return {
            OWNER_FIELD: caller.uid,
            "title": self.title,
            "amount": self.amount,
            "type": self.type,
            "person": self.person or caller.display_name,
            **self._window(),
            "notes": self.notes or "",
        }


INPUT_MODELS: dict[RecordKind, type[TransactionIn]] = {
    RecordKind.SALARIES: SalaryIn,
    RecordKind.EXPENSES: ExpenseIn,
    RecordKind.INVESTMENTS: InvestmentIn,
    RecordKind.ACTIVITIES: ActivityIn,
}


class MemberIn(LedgerInput):
    """
    Household member body.

    Emptiness is checked by the member service after trimming so the
    client gets a plain "Name is required" message.
    """
    name: Optional[str] = None
