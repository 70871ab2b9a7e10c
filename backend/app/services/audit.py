from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.audit import AuditLog, AuditOperation
from app.models.transaction import Transaction


def record(db: Session, tx: Transaction, operation: AuditOperation) -> AuditLog:
    """Anexa a linha de auditoria na mesma unidade de trabalho do posting."""
    entry = AuditLog(
        transaction_id=tx.id,
        user_id=tx.user_id,
        operation=operation,
        description=(tx.description or "")[:200],
    )
    db.add(entry)
    return entry


def list_entries(
    db: Session,
    transaction_id: int | None = None,
    operation: AuditOperation | None = None,
) -> list[AuditLog]:
    q = select(AuditLog).order_by(AuditLog.id)
    if transaction_id is not None:
        q = q.where(AuditLog.transaction_id == transaction_id)
    if operation is not None:
        q = q.where(AuditLog.operation == operation)
    return list(db.scalars(q))
