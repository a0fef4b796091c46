from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountCreate(_CamelModel):
    initial_balance: Decimal = Field(
        ..., ge=0, max_digits=12, decimal_places=2, description="Opening balance"
    )

class MoneyMovementRequest(_CamelModel):
    account_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)

class TransferRequest(_CamelModel):
    source_account_id: UUID
    destination_account_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class AccountCreatedResponse(_CamelModel):
    account_id: UUID
    balance: Decimal = Field(..., ge=0, description='Balance rendered as "X.XX"')

    @field_serializer("balance", when_used="json")
    def render_balance(self, value: Decimal) -> str:
        return f"{value:.2f}"

class CurrentBalanceResponse(_CamelModel):
    balance: Decimal = Field(..., ge=0, description='Balance rendered as "X.XX"')

    @field_serializer("balance", when_used="json")
    def render_balance(self, value: Decimal) -> str:
        return f"{value:.2f}"

class BalanceResponse(_CamelModel):
    """Balance after a deposit or withdrawal, rendered as a JSON number."""

    balance: Decimal = Field(..., ge=0)

    @field_serializer("balance", when_used="json")
    def render_balance(self, value: Decimal) -> float:
        return float(value)

class TransferResponse(_CamelModel):
    source_account_balance: Decimal = Field(..., ge=0)
    destination_account_balance: Decimal = Field(..., ge=0)

    @field_serializer(
        "source_account_balance", "destination_account_balance", when_used="json"
    )
    def render_balance(self, value: Decimal) -> float:
        return float(value)
