from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from app.models.transaction import TransactionKind
from app.schemas.category import CategoryOut
from app.schemas.common import Money, PositiveMoney


def _unique_ids(ids: list[int] | None) -> list[int] | None:
    if ids is None:
        return None
    # preserva a ordem, remove repetidos
    return list(dict.fromkeys(ids))


def _naive_utc(dt: datetime | None) -> datetime | None:
    # normaliza tz-aware pra naive UTC (backend usa naive)
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


class TransactionCreate(BaseModel):
    account_id: int = Field(ge=1)
    amount: PositiveMoney
    kind: TransactionKind
    occurred_at: datetime
    description: str = Field(min_length=1, max_length=200)
    categories: list[int] = Field(default_factory=list)

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("descricao obrigatoria")
        return v

    @field_validator("categories")
    @classmethod
    def _dedupe(cls, v: list[int]) -> list[int]:
        return _unique_ids(v)

    @field_validator("occurred_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return _naive_utc(v)


class TransactionUpdate(BaseModel):
    """Atualizacao parcial: campos ausentes mantem o valor gravado."""

    account_id: int | None = Field(default=None, ge=1)
    amount: PositiveMoney | None = None
    kind: TransactionKind | None = None
    occurred_at: datetime | None = None
    description: str | None = Field(default=None, min_length=1, max_length=200)
    # None = mantem os vinculos; [] = remove todos
    categories: list[int] | None = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("descricao nao pode ser vazia")
        return v

    @field_validator("categories")
    @classmethod
    def _dedupe(cls, v: list[int] | None) -> list[int] | None:
        return _unique_ids(v)

    @field_validator("occurred_at")
    @classmethod
    def _utc(cls, v: datetime | None) -> datetime | None:
        return _naive_utc(v)

    @model_validator(mode="after")
    def _at_least_one(self):
        if self.amount is None and self.occurred_at is None and self.description is None:
            raise ValueError("informe ao menos um de: amount, occurred_at, description")
        return self


class TransactionOut(BaseModel):
    id: int
    account_id: int
    user_id: int | None = None
    kind: TransactionKind
    amount: Money
    description: str
    occurred_at: datetime
    created_at: datetime | None = None
    categories: list[CategoryOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class TransactionCategoryLinkIn(BaseModel):
    transaction_id: int = Field(ge=1)
    category_id: int = Field(ge=1)


class MessageOut(BaseModel):
    message: str
