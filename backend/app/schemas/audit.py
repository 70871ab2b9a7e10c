from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.models.audit import AuditOperation


class AuditLogOut(BaseModel):
    id: int
    transaction_id: int
    user_id: int | None = None
    operation: AuditOperation
    description: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
