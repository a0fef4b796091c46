from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlmodel import Session, select

from ..models import AccountModel


class LedgerRepository:
    """Thin data access layer around the SQLModel session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add_account(self, balance: Decimal) -> AccountModel:
        account = AccountModel(balance=balance)
        self.session.add(account)
        self.session.flush()
        self.session.refresh(account)
        return account

    def get_account(self, account_id: UUID) -> Optional[AccountModel]:
        return self.session.get(AccountModel, account_id)

    def get_account_for_update(self, account_id: UUID) -> Optional[AccountModel]:
        # populate_existing so a copy cached in the identity map is re-read
        # under the row lock instead of being reused.
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.exec(stmt).first()

    def save_account(self, account: AccountModel) -> None:
        self.session.add(account)
        self.session.flush()
