"""
Request Dependencies

FastAPI dependencies that authenticate the caller and hand route
handlers the services they need. The ServiceClients built at startup
live on app.state; nothing here is a module-level singleton.

Authentication always runs before the database is touched: a request
without a bearer credential is rejected even when the database is down.
"""

from fastapi import Depends, Request

from finance_tracker.errors import ServiceUnavailable, Unauthenticated
from finance_tracker.ledger import FundsStore, MemberService, RecordService
from finance_tracker.models.user import VerifiedUser
from finance_tracker.queries import TimeWindowAggregator
from finance_tracker.services.clients import SETUP_HINT, ServiceClients
from finance_tracker.services.identity import IdentityUnavailableError, InvalidTokenError
from finance_tracker.services.storage import DocumentStore


BEARER_PREFIX = "Bearer "
MISSING_CREDENTIAL = "Unauthorized: missing or invalid Authorization header"
INVALID_CREDENTIAL = "Unauthorized: invalid token"


def get_clients(request: Request) -> ServiceClients:
    return request.app.state.clients


async def get_current_user(
    request: Request,
    clients: ServiceClients = Depends(get_clients),
) -> VerifiedUser:
    """
    Verify the bearer credential on the request.

    Raises:
        Unauthenticated: Header missing/malformed or token rejected
        ServiceUnavailable: No identity verifier configured or provider unreachable
    """
    header = request.headers.get("Authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        raise Unauthenticated(MISSING_CREDENTIAL)
    token = header[len(BEARER_PREFIX):]

    if not clients.identity_configured:
        raise ServiceUnavailable("Auth not configured", hint=SETUP_HINT)

    try:
        return await clients.identity.verify(token)
    except InvalidTokenError:
        raise Unauthenticated(INVALID_CREDENTIAL)
    except IdentityUnavailableError as e:
        raise ServiceUnavailable(f"Auth service unavailable: {e}")


def get_store(clients: ServiceClients = Depends(get_clients)) -> DocumentStore:
    if not clients.store_configured:
        raise ServiceUnavailable("Database not available")
    return clients.store


def get_record_service(store: DocumentStore = Depends(get_store)) -> RecordService:
    return RecordService(store)


def get_member_service(store: DocumentStore = Depends(get_store)) -> MemberService:
    return MemberService(store)


def get_funds_store(store: DocumentStore = Depends(get_store)) -> FundsStore:
    return FundsStore(store)


def get_aggregator(records: RecordService = Depends(get_record_service)) -> TimeWindowAggregator:
    return TimeWindowAggregator(records)
