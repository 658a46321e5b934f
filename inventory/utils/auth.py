import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Response
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.config.settings import get_settings
from inventory.dao import UserDAO, UserSessionDAO
from inventory.models import User, UserSession

app_config = get_settings()

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=app_config.bcrypt_rounds,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_pwd: str, hashed_pwd: str) -> bool:
    return pwd_context.verify(plain_pwd, hashed_pwd)


async def authenticate_user(username: str, password: str, db: AsyncSession):
    user = await UserDAO.find_by_username(db, username)
    if not user or verify_password(password, user.password) is False:
        return None
    return user


def create_session_token() -> str:
    return secrets.token_urlsafe(64)


async def login_session(
    db: AsyncSession,
    response: Response,
    user: User,
    old_token: Optional[str] = None,
) -> UserSession:
    """Store a new server-side session for ``user`` and hand its token to the browser."""
    if old_token:
        await UserSessionDAO.delete_by_token(db, old_token)

    expires_at = None
    if app_config.session_max_age is not None:
        expires_at = datetime.now(timezone.utc) + timedelta(
            seconds=app_config.session_max_age
        )
    user_session = await UserSessionDAO.add(
        db,
        user_id=user.id,
        token=create_session_token(),
        expires_at=expires_at,
    )

    response.set_cookie(
        key=app_config.session_cookie,
        value=user_session.token,
        httponly=True,
        samesite="lax",
        max_age=app_config.session_max_age,
        # secure=True for https deployments
    )
    return user_session


async def logout_session(
    db: AsyncSession, response: Response, token: Optional[str]
) -> None:
    if token:
        await UserSessionDAO.delete_by_token(db, token)
    response.delete_cookie(app_config.session_cookie)


__all__ = [
    "get_password_hash",
    "verify_password",
    "authenticate_user",
    "create_session_token",
    "login_session",
    "logout_session",
]
