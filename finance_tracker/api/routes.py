"""
API Routes

Every route under /api requires a verified caller. The caller dependency
is declared first in each handler so authentication is resolved before
the database dependency.
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends

from finance_tracker.api.dependencies import (
    get_aggregator,
    get_current_user,
    get_funds_store,
    get_member_service,
    get_record_service,
)
from finance_tracker.errors import InvalidArgument
from finance_tracker.ledger import FundsStore, MemberService, RecordService
from finance_tracker.models.funds import FundsUpdate
from finance_tracker.models.records import INPUT_MODELS, MemberIn, RecordKind, TransactionIn
from finance_tracker.models.user import VerifiedUser
from finance_tracker.queries import TimeWindowAggregator


YEAR_SEGMENT = "year"
INTEGER_PATTERN = re.compile(r"-?[0-9]+")

router = APIRouter(prefix="/api")


def parse_int_param(value: str, message: str) -> int:
    """Parse an optionally signed run of ASCII digits; anything else is a 400."""
    if not INTEGER_PATTERN.fullmatch(value):
        raise InvalidArgument(message)
    return int(value)


# --- Time-window aggregates ---
@router.get("/data/{first}/{second}")
async def get_window(
    first: str,
    second: str,
    caller: VerifiedUser = Depends(get_current_user),
    aggregator: TimeWindowAggregator = Depends(get_aggregator),
):
    """
    /api/data/year/{year} or /api/data/{year}/{month}.

    A first segment equal to the literal "year" always selects the
    whole-year aggregate; anything else is read as year and month.
    """
    if first == YEAR_SEGMENT:
        year = parse_int_param(second, "Invalid year")
        return await aggregator.aggregate(caller, year)

    message = "Invalid year or month"
    year = parse_int_param(first, message)
    month = parse_int_param(second, message)
    return await aggregator.aggregate(caller, year, month)


# --- Transactional records ---
def _register_record_routes(kind: RecordKind, model: type[TransactionIn]) -> None:
    """Add POST /api/{kind} and DELETE /api/{kind}/{id} for one collection."""

    async def create_record(
        payload: model,
        caller: VerifiedUser = Depends(get_current_user),
        records: RecordService = Depends(get_record_service),
    ):
        return await records.create(kind, caller, payload)

    async def delete_record(
        record_id: str,
        caller: VerifiedUser = Depends(get_current_user),
        records: RecordService = Depends(get_record_service),
    ):
        await records.delete(kind, caller, record_id)
        return {"success": True}

    router.add_api_route(
        f"/{kind.value}",
        create_record,
        methods=["POST"],
        name=f"create_{kind.value}",
    )
    router.add_api_route(
        f"/{kind.value}/{{record_id}}",
        delete_record,
        methods=["DELETE"],
        name=f"delete_{kind.value}",
    )


for _kind, _model in INPUT_MODELS.items():
    _register_record_routes(_kind, _model)


# --- Household members ---
@router.get("/members")
async def list_members(
    caller: VerifiedUser = Depends(get_current_user),
    members: MemberService = Depends(get_member_service),
):
    return await members.list(caller)


@router.post("/members")
async def create_member(
    payload: Optional[MemberIn] = None,
    caller: VerifiedUser = Depends(get_current_user),
    members: MemberService = Depends(get_member_service),
):
    return await members.create(caller, payload.name if payload else None)


@router.delete("/members/{member_id}")
async def delete_member(
    member_id: str,
    caller: VerifiedUser = Depends(get_current_user),
    members: MemberService = Depends(get_member_service),
):
    await members.delete(caller, member_id)
    return {"success": True}


# --- Savings funds ---
@router.get("/funds")
async def get_funds(
    caller: VerifiedUser = Depends(get_current_user),
    funds: FundsStore = Depends(get_funds_store),
):
    return await funds.read(caller)


@router.put("/funds")
async def put_funds(
    payload: Optional[FundsUpdate] = None,
    caller: VerifiedUser = Depends(get_current_user),
    funds: FundsStore = Depends(get_funds_store),
):
    return await funds.write(caller, payload or FundsUpdate())
