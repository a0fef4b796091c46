from fastapi import APIRouter, Depends, status

from ..core.dependencies import get_ledger_service
from ..models import (
    AccountCreate,
    AccountCreatedResponse,
    BalanceResponse,
    CurrentBalanceResponse,
    MoneyMovementRequest,
    TransferRequest,
    TransferResponse,
)
from ..services import LedgerService


router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.post(
    "/create-account",
    response_model=AccountCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_account(
    payload: AccountCreate,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountCreatedResponse:
    return service.create_account(payload)

@router.post("/deposit", response_model=BalanceResponse)
def deposit(
    payload: MoneyMovementRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return service.deposit(payload)

@router.post("/withdraw", response_model=BalanceResponse)
def withdraw(
    payload: MoneyMovementRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return service.withdraw(payload)

@router.post("/transfer", response_model=TransferResponse)
def transfer(
    payload: TransferRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransferResponse:
    return service.transfer(payload)

# Any string is accepted here: an id that is not a UUID is simply not found.
@router.get("/accounts/current-balance/{account_id}", response_model=CurrentBalanceResponse)
def get_current_balance(
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> CurrentBalanceResponse:
    return service.get_balance(account_id)

__all__ = ["router"]
