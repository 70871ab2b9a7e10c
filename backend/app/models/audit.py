import enum
from datetime import datetime

from sqlalchemy import String, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column
from app.db import Base
from app.models.base import utcnow


class AuditOperation(str, enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditLog(Base):
    """Linha append-only por operacao que altera uma transacao.

    transaction_id e user_id sao snapshots sem FK: o historico sobrevive
    a remocao da transacao.
    """

    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    transaction_id: Mapped[int] = mapped_column(index=True)
    user_id: Mapped[int | None] = mapped_column(nullable=True)
    operation: Mapped[AuditOperation] = mapped_column(
        Enum(AuditOperation, name="audit_operation", native_enum=False, create_constraint=True, length=6)
    )
    description: Mapped[str] = mapped_column(String(200), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
