from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator

class CategoryCreate(BaseModel):
    name: str = Field(min_length=2, max_length=80)

    @field_validator("name")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("nome da categoria obrigatorio (min 2 chars)")
        return v

class CategoryUpdate(CategoryCreate):
    pass

class CategoryOut(BaseModel):
    id: int
    name: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
