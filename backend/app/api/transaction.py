from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.transaction import TransactionKind
from app.schemas.transaction import (
    MessageOut,
    TransactionCategoryLinkIn,
    TransactionCreate,
    TransactionOut,
    TransactionUpdate,
)
from app.services import posting

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _require_id(tx_id: int | None) -> int:
    if tx_id is None:
        raise HTTPException(status_code=400, detail="ID da transacao nao fornecido")
    return tx_id


@router.get("", response_model=list[TransactionOut])
def list_transactions(
    kind: TransactionKind | None = Query(None, description="ENTRADA ou SAIDA"),
    account_id: int | None = Query(None, ge=1),
    category_id: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    return posting.list_transactions(db, kind=kind, account_id=account_id, category_id=category_id)


@router.post("", response_model=TransactionOut)
def create_transaction(payload: TransactionCreate, db: Session = Depends(get_db)):
    """
    Lanca uma transacao na conta e ajusta o saldo.
    SAIDA sem saldo suficiente, conta ou categoria inexistente => 400.
    """
    return posting.create_transaction(db, payload)


@router.put("", response_model=TransactionOut)
def update_transaction(
    payload: TransactionUpdate,
    tx_id: int | None = Query(None, alias="id", ge=1),
    db: Session = Depends(get_db),
):
    return posting.update_transaction(db, _require_id(tx_id), payload)


@router.delete("", response_model=MessageOut)
def delete_transaction(
    tx_id: int | None = Query(None, alias="id", ge=1),
    db: Session = Depends(get_db),
):
    posting.delete_transaction(db, _require_id(tx_id))
    return MessageOut(message="Transacao removida com sucesso")


@router.post("/categories", response_model=TransactionOut)
def add_category_to_transaction(payload: TransactionCategoryLinkIn, db: Session = Depends(get_db)):
    return posting.link_category(db, payload.transaction_id, payload.category_id)
