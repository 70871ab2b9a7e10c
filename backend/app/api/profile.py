from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.db import get_db
from app.models.user import User, ConfigurationProfile
from app.schemas.transaction import MessageOut
from app.schemas.user import ProfileCreate, ProfileOut, ProfileUpdate

router = APIRouter(prefix="/configuration-profile", tags=["configuration-profile"])


def _by_user(db: Session, user_id: int) -> ConfigurationProfile | None:
    return db.scalar(select(ConfigurationProfile).where(ConfigurationProfile.user_id == user_id))


def _get_or_404(db: Session, user_id: int) -> ConfigurationProfile:
    p = _by_user(db, user_id)
    if not p:
        raise HTTPException(status_code=404, detail="Perfil de configuracao nao encontrado")
    return p


@router.get("", response_model=ProfileOut)
def get_profile(user_id: int = Query(..., ge=1), db: Session = Depends(get_db)):
    return _get_or_404(db, user_id)


@router.post("", response_model=ProfileOut)
def create_profile(payload: ProfileCreate, db: Session = Depends(get_db)):
    if db.get(User, payload.user_id) is None:
        raise HTTPException(status_code=400, detail="Usuario nao encontrado")
    if _by_user(db, payload.user_id):
        raise HTTPException(status_code=400, detail="O usuario ja possui um perfil de configuracao")

    p = ConfigurationProfile(**payload.model_dump())
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


@router.put("", response_model=ProfileOut)
def update_profile(payload: ProfileUpdate, db: Session = Depends(get_db)):
    p = _get_or_404(db, payload.user_id)
    for field, value in payload.model_dump(exclude={"user_id"}, exclude_none=True).items():
        setattr(p, field, value)
    db.commit()
    db.refresh(p)
    return p


@router.delete("", response_model=MessageOut)
def delete_profile(user_id: int = Query(..., ge=1), db: Session = Depends(get_db)):
    p = _get_or_404(db, user_id)
    db.delete(p)
    db.commit()
    return MessageOut(message="Perfil de configuracao excluido com sucesso")
