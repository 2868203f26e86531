"""Ledger package: owner-scoped records, members and savings funds."""

from finance_tracker.ledger.funds import FUNDS_COLLECTION, FundsStore
from finance_tracker.ledger.members import MEMBERS_COLLECTION, MemberService
from finance_tracker.ledger.records import RecordService
from finance_tracker.ledger.scoped import ScopedCollection, belongs_to_caller

__all__ = [
    "FUNDS_COLLECTION",
    "FundsStore",
    "MEMBERS_COLLECTION",
    "MemberService",
    "RecordService",
    "ScopedCollection",
    "belongs_to_caller",
]
