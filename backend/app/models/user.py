from datetime import datetime

from sqlalchemy import String, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db import Base
from app.models.base import utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(80))
    email: Mapped[str] = mapped_column(String(200), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    profile = relationship(
        "ConfigurationProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    accounts = relationship(
        "Account", back_populates="user", order_by="Account.id", cascade="all, delete-orphan"
    )


class ConfigurationProfile(Base):
    __tablename__ = "configuration_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True)
    notifications_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    preferred_currency: Mapped[str] = mapped_column(String(3), default="BRL")

    user = relationship("User", back_populates="profile")
