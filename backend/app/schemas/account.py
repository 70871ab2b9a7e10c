from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from app.schemas.common import Money


class AccountCreate(BaseModel):
    user_id: int = Field(ge=1)
    name: str = Field(default="Conta principal", min_length=1, max_length=80)
    # saldo de abertura
    balance: Money = Field(default=Decimal("0.00"), ge=0)


class AccountOut(BaseModel):
    id: int
    user_id: int
    name: str
    balance: Money
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
