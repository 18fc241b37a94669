"""
Balance endpoints: fund, withdraw, transfer.

All three require a bearer credential; the resolved account id
is the account being funded (unless the body names another),
withdrawn from, or transferred from.
"""

from fastapi import APIRouter, Depends

from mini_ledger.api.deps import get_app_settings, get_caller_account, get_store
from mini_ledger.config import Settings
from mini_ledger.schemas.common import ApiResponse
from mini_ledger.schemas.transaction import (
    FundRequest,
    FundingReceipt,
    WithdrawRequest,
    WithdrawalReceipt,
    TransferRequest,
    TransferReceipt,
)
from mini_ledger.services.transaction_service import TransactionService
from mini_ledger.store import LedgerStore

router = APIRouter(tags=["Transactions"])


def _service(store: LedgerStore, settings: Settings) -> TransactionService:
    return TransactionService(store, retry_limit=settings.BALANCE_RETRY_LIMIT)


@router.post(
    "/fund",
    response_model=ApiResponse[FundingReceipt],
    status_code=201,
)
def fund(
    request: FundRequest,
    caller: str = Depends(get_caller_account),
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Add money to an account."""
    receipt = _service(store, settings).fund(
        request.to_account or caller, request.amount
    )
    return ApiResponse[FundingReceipt](message="Funding successful", data=receipt)


@router.post(
    "/withdraw",
    response_model=ApiResponse[WithdrawalReceipt],
    status_code=201,
)
def withdraw(
    request: WithdrawRequest,
    caller: str = Depends(get_caller_account),
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Take money out of the caller's account."""
    receipt = _service(store, settings).withdraw(caller, request.amount)
    return ApiResponse[WithdrawalReceipt](
        message="Withdrawal successful", data=receipt
    )


@router.post(
    "/transfer",
    response_model=ApiResponse[TransferReceipt],
    status_code=201,
)
def transfer(
    request: TransferRequest,
    caller: str = Depends(get_caller_account),
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Move money from the caller's account to another account."""
    receipt = _service(store, settings).transfer(
        caller, request.to_account, request.amount
    )
    return ApiResponse[TransferReceipt](message="Transfer successful", data=receipt)
