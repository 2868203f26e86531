"""
Data Models Package

Pydantic models for request bodies, stored documents and the
authenticated caller.
"""

from finance_tracker.models.funds import (
    FUND_NAMES,
    Fund,
    FundIn,
    FundsUpdate,
    default_fund,
)
from finance_tracker.models.records import (
    INPUT_MODELS,
    OWNER_FIELD,
    ActivityIn,
    ExpenseIn,
    InvestmentIn,
    MemberIn,
    RecordKind,
    SalaryIn,
    TransactionIn,
)
from finance_tracker.models.user import VerifiedUser

__all__ = [
    # Funds
    "FUND_NAMES",
    "Fund",
    "FundIn",
    "FundsUpdate",
    "default_fund",
    # Records
    "INPUT_MODELS",
    "OWNER_FIELD",
    "ActivityIn",
    "ExpenseIn",
    "InvestmentIn",
    "MemberIn",
    "RecordKind",
    "SalaryIn",
    "TransactionIn",
    # Identity
    "VerifiedUser",
]
