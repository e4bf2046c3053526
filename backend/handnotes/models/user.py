import uuid
import datetime as dt
from sqlmodel import SQLModel, Field

from handnotes.models.note import utcnow

MIN_PASSWORD_LENGTH = 6


class User(SQLModel, table=True):
    id: uuid.UUID | None = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(unique=True, index=True)
    hashed_password: str
    is_active: bool = True
    confirmed_at: dt.datetime | None = None
    created_at: dt.datetime = Field(default_factory=utcnow)


class RevokedToken(SQLModel, table=True):
    jti: str = Field(primary_key=True)
    revoked_at: dt.datetime = Field(default_factory=utcnow)


class UserCreate(SQLModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class UserRead(SQLModel):
    id: uuid.UUID
    email: str


class SignupResult(SQLModel):
    msg: str
    confirmation_required: bool


class ConfirmRequest(SQLModel):
    token: str
