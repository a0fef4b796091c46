from __future__ import annotations
from datetime import datetime, UTC
from decimal import Decimal
from uuid import UUID, uuid4
from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

class Account(SQLModel, table=True):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    balance: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
