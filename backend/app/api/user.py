from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
import logging

from app.db import get_db
from app.models.account import Account
from app.models.transaction import Transaction
from app.models.user import User, ConfigurationProfile
from app.schemas.transaction import MessageOut
from app.schemas.user import UserCreate, UserOut, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])

logger = logging.getLogger(__name__)


def _load(db: Session, user_id: int) -> User | None:
    return db.scalar(
        select(User)
        .options(selectinload(User.profile), selectinload(User.accounts))
        .where(User.id == user_id)
    )


def _get_or_404(db: Session, user_id: int | None) -> User:
    if user_id is None:
        raise HTTPException(status_code=400, detail="ID do usuario nao fornecido")
    u = _load(db, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="Usuario nao encontrado")
    return u


def _email_taken(db: Session, email: str, except_id: int | None = None) -> bool:
    q = select(User.id).where(func.lower(User.email) == email.lower())
    if except_id is not None:
        q = q.where(User.id != except_id)
    return db.scalar(q) is not None


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email ja cadastrado")


@router.get("", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    q = (
        select(User)
        .options(selectinload(User.profile), selectinload(User.accounts))
        .order_by(User.id)
    )
    return list(db.scalars(q))


@router.post("", response_model=UserOut)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    if _email_taken(db, payload.email):
        raise HTTPException(status_code=400, detail="Email ja cadastrado")

    u = User(username=payload.username.strip(), email=payload.email)
    if payload.profile is not None:
        u.profile = ConfigurationProfile(**payload.profile.model_dump())
    db.add(u)
    _commit(db)
    return _load(db, u.id)


@router.put("", response_model=UserOut)
def update_user(
    payload: UserUpdate,
    user_id: int | None = Query(None, alias="id", ge=1),
    db: Session = Depends(get_db),
):
    u = _get_or_404(db, user_id)

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise HTTPException(status_code=400, detail="Nada para atualizar")
    if "email" in data and _email_taken(db, data["email"], except_id=u.id):
        raise HTTPException(status_code=400, detail="Email ja cadastrado")

    for field, value in data.items():
        setattr(u, field, value)
    _commit(db)
    return _load(db, u.id)


@router.delete("", response_model=MessageOut)
def delete_user(
    user_id: int | None = Query(None, alias="id", ge=1),
    db: Session = Depends(get_db),
):
    u = _get_or_404(db, user_id)

    # contas com lancamentos nao somem: o saldo delas e historico
    posted = db.scalar(
        select(func.count(Transaction.id))
        .join(Account, Account.id == Transaction.account_id)
        .where(Account.user_id == u.id)
    )
    if posted:
        raise HTTPException(status_code=400, detail="Usuario possui contas com transacoes")

    db.delete(u)
    db.commit()
    logger.info("usuario %s removido", u.id)
    return MessageOut(message="Usuario removido com sucesso")
