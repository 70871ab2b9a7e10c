from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.schemas.account import AccountOut


class ProfileFields(BaseModel):
    notifications_enabled: bool = True
    preferred_currency: str = Field(default="BRL", min_length=3, max_length=3)

    @field_validator("preferred_currency")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()


class ProfileCreate(ProfileFields):
    user_id: int = Field(ge=1)


class ProfileUpdate(BaseModel):
    user_id: int = Field(ge=1)
    notifications_enabled: bool | None = None
    preferred_currency: str | None = Field(default=None, min_length=3, max_length=3)

    @field_validator("preferred_currency")
    @classmethod
    def _upper(cls, v: str | None) -> str | None:
        return v.upper() if v else v


class ProfileOut(BaseModel):
    id: int
    user_id: int
    notifications_enabled: bool
    preferred_currency: str

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    email: str = Field(min_length=3, max_length=200, pattern=r"^[^@\s]+@[^@\s]+$")
    profile: ProfileFields | None = None


class UserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=80)
    email: str | None = Field(default=None, min_length=3, max_length=200, pattern=r"^[^@\s]+@[^@\s]+$")


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime | None = None
    profile: ProfileOut | None = None
    accounts: list[AccountOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
