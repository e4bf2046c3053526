import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from handnotes.config import settings
from handnotes.db import get_db
from handnotes.errors import AuthError
from handnotes.models.note import utcnow
from handnotes.models.user import (
    ConfirmRequest,
    RevokedToken,
    SignupResult,
    User,
    UserCreate,
    UserRead,
)

LOGGER = logging.getLogger("handnotes.auth")

router = APIRouter(prefix="/api/auth", tags=["auth"])
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")
ALGORITHM = "HS256"

ACCESS = "access"
CONFIRM = "confirm"


def verify_pw(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def hash_pw(pw: str) -> str:
    return pwd_context.hash(pw)

def create_token(data: dict, minutes: int) -> str:
    payload = data.copy()
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload.setdefault("jti", uuid.uuid4().hex)
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)

def decode_token(token: str, purpose: str) -> dict:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthError("Invalid or expired token")
    if payload.get("purpose") != purpose or not payload.get("sub"):
        raise AuthError("Invalid or expired token")
    return payload

def send_confirmation(user: User, token: str) -> None:
    # no mail transport configured; the link goes to the log
    LOGGER.info(
        "Confirmation link for %s: %s/confirm?token=%s",
        user.email,
        settings.public_url.rstrip("/"),
        token,
    )

def auth_user(db: Session, email: str, pw: str) -> User:
    user = db.exec(select(User).where(User.email == email.lower())).first()
    if not user or not user.is_active or not verify_pw(pw, user.hashed_password):
        raise AuthError("Invalid login credentials")
    if user.confirmed_at is None:
        raise AuthError("Email not confirmed")
    return user


@router.post("/signup", response_model=SignupResult, status_code=201)
def signup(body: UserCreate, db: Session = Depends(get_db)):
    user = User(email=body.email.lower(), hashed_password=hash_pw(body.password))
    if settings.auto_confirm_signups:
        user.confirmed_at = utcnow()
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise AuthError("User already registered")
    db.refresh(user)

    if user.confirmed_at is not None:
        return SignupResult(msg="Account created", confirmation_required=False)

    token = create_token(
        {"sub": str(user.id), "purpose": CONFIRM},
        settings.confirmation_token_expire_minutes,
    )
    send_confirmation(user, token)
    return SignupResult(msg="Check your email to confirm your account", confirmation_required=True)

@router.post("/confirm", response_model=UserRead)
def confirm(body: ConfirmRequest, db: Session = Depends(get_db)):
    payload = decode_token(body.token, CONFIRM)
    user = db.get(User, uuid.UUID(payload["sub"]))
    if not user:
        raise AuthError("Invalid or expired token")
    if user.confirmed_at is None:
        user.confirmed_at = utcnow()
        db.add(user)
        db.commit()
        db.refresh(user)
    return user

@router.post("/token")
def token(form: Annotated[OAuth2PasswordRequestForm, Depends()], db: Session = Depends(get_db)):
    user = auth_user(db, form.username, form.password)
    LOGGER.info("User %s signed in", user.id)
    return {
        "access_token": create_token(
            {"sub": str(user.id), "purpose": ACCESS}, settings.access_token_expire_minutes
        ),
        "token_type": "bearer",
    }


def current_user(token: Annotated[str, Depends(oauth2_scheme)], db: Session = Depends(get_db)) -> User:
    payload = decode_token(token, ACCESS)
    if db.get(RevokedToken, payload.get("jti")):
        raise AuthError("Session has ended")
    user = db.get(User, uuid.UUID(payload["sub"]))
    if not user or not user.is_active:
        raise AuthError("User not found")
    return user


@router.post("/signout", status_code=204)
def signout(token: Annotated[str, Depends(oauth2_scheme)], db: Session = Depends(get_db)):
    payload = decode_token(token, ACCESS)
    jti = payload.get("jti")
    if jti and not db.get(RevokedToken, jti):
        db.add(RevokedToken(jti=jti))
        db.commit()
    return Response(status_code=204)

@router.get("/me", response_model=UserRead)
def me(user: User = Depends(current_user)):
    return user
