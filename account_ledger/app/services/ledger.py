from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..core.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidInputError,
    LedgerError,
    PersistenceError,
)
from ..core.locks import AccountLocks
from ..models import (
    AccountCreate,
    AccountCreatedResponse,
    AccountModel,
    BalanceResponse,
    CurrentBalanceResponse,
    MoneyMovementRequest,
    TransferRequest,
    TransferResponse,
)
from .repository import LedgerRepository


logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Largest value a Numeric(12, 2) balance column can hold.
MAX_BALANCE = Decimal("9999999999.99")


def to_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class LedgerService:
    """Balance mutations for accounts.

    Every mutation takes the per-account locks first, then runs in a single
    database transaction that reads the rows ``FOR UPDATE``. The locks are
    released only after commit or rollback.
    """

    def __init__(
        self,
        session: Session,
        locks: AccountLocks,
        repository: Optional[LedgerRepository] = None,
    ) -> None:
        self.session = session
        self.locks = locks
        self.repository = repository or LedgerRepository(session)

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    @contextmanager
    def _transaction(self, failure_message: str) -> Iterator[None]:
        try:
            yield
            self.session.commit()
        except LedgerError:
            self.session.rollback()
            raise
        except Exception as exc:
            # Storage failures and anything else unexpected surface as one
            # opaque error; the cause only goes to the log.
            self.session.rollback()
            logger.exception(
                "ledger.persistence_error",
                extra={
                    "operation": failure_message,
                    "storage_error": isinstance(exc, SQLAlchemyError),
                },
            )
            raise PersistenceError(failure_message) from exc

    def _coerce_id(self, account_id: Union[UUID, str]) -> UUID:
        if isinstance(account_id, UUID):
            return account_id
        try:
            return UUID(str(account_id))
        except ValueError as exc:
            raise AccountNotFoundError() from exc

    def _positive_amount(self, amount: Decimal) -> Decimal:
        if amount <= 0:
            raise InvalidInputError("Amount must be greater than zero.")
        return to_money(amount)

    def _credit(self, account: AccountModel, amount: Decimal) -> None:
        balance = to_money(account.balance + amount)
        if balance > MAX_BALANCE:
            raise InvalidInputError("Resulting balance exceeds the account limit.")
        account.balance = balance

    def _lock_account(self, account_id: UUID) -> AccountModel:
        account = self.repository.get_account_for_update(account_id)
        if account is None:
            raise AccountNotFoundError()
        return account

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def create_account(self, payload: AccountCreate) -> AccountCreatedResponse:
        if payload.initial_balance < 0:
            raise InvalidInputError("Initial balance must not be negative.")
        balance = to_money(payload.initial_balance)

        with self._transaction("Failed to create account."):
            account = self.repository.add_account(balance)
            response = AccountCreatedResponse(account_id=account.id, balance=balance)

        logger.info(
            "account.created",
            extra={"account_id": str(response.account_id), "balance": str(balance)},
        )
        return response

    def deposit(self, payload: MoneyMovementRequest) -> BalanceResponse:
        amount = self._positive_amount(payload.amount)
        account_id = payload.account_id

        with self.locks.hold(account_id), self._transaction("Failed to deposit funds."):
            account = self._lock_account(account_id)
            self._credit(account, amount)
            self.repository.save_account(account)
            balance = account.balance

        logger.info(
            "account.deposit",
            extra={"account_id": str(account_id), "amount": str(amount), "balance": str(balance)},
        )
        return BalanceResponse(balance=balance)

    def withdraw(self, payload: MoneyMovementRequest) -> BalanceResponse:
        amount = self._positive_amount(payload.amount)
        account_id = payload.account_id

        with self.locks.hold(account_id), self._transaction("Failed to withdraw funds."):
            account = self._lock_account(account_id)
            if account.balance < amount:
                logger.warning(
                    "account.withdraw.rejected",
                    extra={
                        "account_id": str(account_id),
                        "amount": str(amount),
                        "balance": str(account.balance),
                    },
                )
                raise InsufficientFundsError()
            account.balance = to_money(account.balance - amount)
            self.repository.save_account(account)
            balance = account.balance

        logger.info(
            "account.withdraw",
            extra={"account_id": str(account_id), "amount": str(amount), "balance": str(balance)},
        )
        return BalanceResponse(balance=balance)

    def transfer(self, payload: TransferRequest) -> TransferResponse:
        amount = self._positive_amount(payload.amount)
        source_id = payload.source_account_id
        dest_id = payload.destination_account_id
        if source_id == dest_id:
            raise InvalidInputError("Cannot transfer to the same account.")

        with self.locks.hold(source_id, dest_id), self._transaction("Failed to transfer funds."):
            # Row locks follow the same order as the in-process locks.
            accounts = {
                account_id: self._lock_account(account_id)
                for account_id in AccountLocks.ordered(source_id, dest_id)
            }
            source = accounts[source_id]
            dest = accounts[dest_id]

            if source.balance < amount:
                logger.warning(
                    "account.transfer.rejected",
                    extra={
                        "source_account_id": str(source_id),
                        "destination_account_id": str(dest_id),
                        "amount": str(amount),
                        "balance": str(source.balance),
                    },
                )
                raise InsufficientFundsError()

            source.balance = to_money(source.balance - amount)
            self.repository.save_account(source)
            self._credit(dest, amount)
            self.repository.save_account(dest)
            response = TransferResponse(
                source_account_balance=source.balance,
                destination_account_balance=dest.balance,
            )

        logger.info(
            "account.transfer",
            extra={
                "source_account_id": str(source_id),
                "destination_account_id": str(dest_id),
                "amount": str(amount),
            },
        )
        return response

    def get_balance(self, account_id: Union[UUID, str]) -> CurrentBalanceResponse:
        account_uuid = self._coerce_id(account_id)
        with self._transaction("Failed to get account balance."):
            account = self.repository.get_account(account_uuid)
            if account is None:
                raise AccountNotFoundError()
            response = CurrentBalanceResponse(balance=account.balance)
        return response
