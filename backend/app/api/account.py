from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.db import get_db
from app.models.account import Account
from app.models.transaction import Transaction
from app.models.user import User
from app.schemas.account import AccountCreate, AccountOut
from app.schemas.transaction import MessageOut

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountOut])
def list_accounts(user_id: int | None = Query(None, ge=1), db: Session = Depends(get_db)):
    q = select(Account).order_by(Account.id)
    if user_id is not None:
        q = q.where(Account.user_id == user_id)
    return list(db.scalars(q))


@router.post("", response_model=AccountOut)
def create_account(payload: AccountCreate, db: Session = Depends(get_db)):
    if db.get(User, payload.user_id) is None:
        raise HTTPException(status_code=400, detail="Usuario (user_id) nao existe")

    a = Account(user_id=payload.user_id, name=payload.name.strip(), balance=payload.balance)
    db.add(a)
    db.commit()
    db.refresh(a)
    return a


@router.delete("", response_model=MessageOut)
def delete_account(
    account_id: int | None = Query(None, alias="id", ge=1),
    db: Session = Depends(get_db),
):
    if account_id is None:
        raise HTTPException(status_code=400, detail="ID da conta nao fornecido")
    a = db.get(Account, account_id)
    if not a:
        raise HTTPException(status_code=404, detail="Conta nao encontrada")

    posted = db.scalar(select(Transaction.id).where(Transaction.account_id == a.id).limit(1))
    if posted:
        raise HTTPException(status_code=400, detail="Conta possui transacoes")

    db.delete(a)
    db.commit()
    return MessageOut(message="Conta removida com sucesso")
