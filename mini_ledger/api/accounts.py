"""
Account creation and login endpoints.
"""

from fastapi import APIRouter, Depends

from mini_ledger.api.deps import get_app_settings, get_store
from mini_ledger.config import Settings
from mini_ledger.schemas.account import AccountCreate, AccountView, LoginRequest
from mini_ledger.schemas.common import ApiResponse
from mini_ledger.schemas.session import LoginView
from mini_ledger.services.account_service import AccountService
from mini_ledger.services.session_service import SessionService
from mini_ledger.store import LedgerStore

router = APIRouter(tags=["Accounts"])


@router.post(
    "/create",
    response_model=ApiResponse[AccountView],
    status_code=201,
)
def create_account(
    request: AccountCreate,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Create a new account with a zero balance."""
    service = AccountService(store, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    account = service.create_account(
        request.username, request.password, request.email
    )
    return ApiResponse[AccountView](
        message="Account created successfully", data=account
    )


@router.post("/login", response_model=ApiResponse[LoginView])
def login(
    request: LoginRequest,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Check credentials and return the account with its history.

    credits, debits and transfers are always present, as empty
    lists when the account has none.
    """
    accounts = AccountService(store, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    view = SessionService(store, accounts).login(
        request.username, request.password
    )
    return ApiResponse[LoginView](message="Login successful", data=view)
