from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.audit import AuditOperation
from app.schemas.audit import AuditLogOut
from app.services import audit

router = APIRouter(prefix="/audit-logs", tags=["audit"])


@router.get("", response_model=list[AuditLogOut])
def list_audit_logs(
    transaction_id: int | None = Query(None, ge=1),
    operation: AuditOperation | None = None,
    db: Session = Depends(get_db),
):
    return audit.list_entries(db, transaction_id=transaction_id, operation=operation)
