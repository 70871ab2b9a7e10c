from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
import logging

from app.db import get_db
from app.models.category import Category
from app.models.transaction import TransactionCategory
from app.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from app.schemas.transaction import MessageOut

router = APIRouter(prefix="/categories", tags=["categories"])

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, category_id: int | None) -> Category:
    if category_id is None:
        raise HTTPException(status_code=400, detail="ID da categoria nao fornecido")
    c = db.get(Category, category_id)
    if not c:
        raise HTTPException(status_code=404, detail="Categoria nao encontrada")
    return c


def _commit_unique(db: Session) -> None:
    # corrida entre a checagem e o insert: a constraint UNIQUE decide
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("nome de categoria duplicado (constraint)")
        raise HTTPException(status_code=400, detail="Categoria ja existe")


@router.post("", response_model=CategoryOut)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    exists = db.scalar(select(Category).where(Category.name == payload.name))
    if exists:
        raise HTTPException(status_code=400, detail="Categoria ja existe")
    c = Category(name=payload.name)
    db.add(c)
    _commit_unique(db)
    db.refresh(c)
    return c


@router.get("", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return list(db.scalars(select(Category).order_by(Category.id)))


@router.put("", response_model=CategoryOut)
def rename_category(
    payload: CategoryUpdate,
    category_id: int | None = Query(None, alias="id", ge=1),
    db: Session = Depends(get_db),
):
    c = _get_or_404(db, category_id)

    other = db.scalar(select(Category).where(Category.name == payload.name))
    if other and other.id != c.id:
        raise HTTPException(status_code=400, detail="Nome da categoria ja em uso")

    c.name = payload.name
    _commit_unique(db)
    db.refresh(c)
    return c


@router.delete("", response_model=MessageOut)
def delete_category(
    category_id: int | None = Query(None, alias="id", ge=1),
    db: Session = Depends(get_db),
):
    c = _get_or_404(db, category_id)

    in_use = db.scalar(select(TransactionCategory).where(TransactionCategory.category_id == c.id).limit(1))
    if in_use:
        raise HTTPException(status_code=400, detail="Categoria vinculada a transacoes")

    db.delete(c)
    db.commit()
    return MessageOut(message="Categoria removida com sucesso")
