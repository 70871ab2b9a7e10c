from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.schemas.account import AccountOut
from app.schemas.transaction import TransactionCreate, TransactionUpdate


def test_money_is_decimal_inside_and_number_in_json():
    out = AccountOut(id=1, user_id=1, name="Conta", balance=Decimal("10.50"))
    assert out.balance == Decimal("10.50")
    assert out.model_dump(mode="json")["balance"] == 10.5


def test_create_normalizes_payload():
    tx = TransactionCreate(
        account_id=1,
        amount="19.90",
        kind="SAIDA",
        occurred_at="2024-11-15T18:12:33.655-03:00",
        description="  padaria ",
        categories=[3, 1, 3],
    )
    assert tx.amount == Decimal("19.90")
    assert tx.description == "padaria"
    assert tx.categories == [3, 1]
    assert tx.occurred_at == datetime(2024, 11, 15, 21, 12, 33, 655000)


def test_update_needs_amount_date_or_description():
    with pytest.raises(ValidationError):
        TransactionUpdate(kind="ENTRADA", categories=[1])

    upd = TransactionUpdate(description="ok")
    assert upd.categories is None
    assert TransactionUpdate(amount=1, categories=[]).categories == []
