"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

from fastapi import APIRouter, Depends

from mini_ledger.api.deps import get_store
from mini_ledger.store import LedgerStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(store: LedgerStore = Depends(get_store)):
    """
    Return application health status including database connectivity.

    A failed ping reports the service as degraded rather than
    failing the request, so monitors can tell "up but cannot
    reach the database" apart from "down".
    """
    db_status = "healthy" if store.ping() else "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "mini-ledger",
        "database": db_status,
    }
