from .db import Account as AccountModel
from .schemas import (
    AccountCreate,
    AccountCreatedResponse,
    BalanceResponse,
    CurrentBalanceResponse,
    MoneyMovementRequest,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    "AccountCreate",
    "AccountCreatedResponse",
    "BalanceResponse",
    "CurrentBalanceResponse",
    "MoneyMovementRequest",
    "TransferRequest",
    "TransferResponse",
    "AccountModel",
]
