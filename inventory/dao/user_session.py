from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from .base import BaseDAO
from inventory.models import UserSession


class UserSessionDAO(BaseDAO):
    model = UserSession

    @classmethod
    async def find_active_by_token(
        cls, db: AsyncSession, token: str
    ) -> Optional[UserSession]:
        result = await db.execute(
            select(cls.model)
            .where(
                cls.model.token == token,
                or_(
                    cls.model.expires_at.is_(None),
                    cls.model.expires_at > datetime.now(timezone.utc),
                ),
            )
            .options(selectinload(cls.model.user))
        )
        return result.scalar_one_or_none()

    @classmethod
    async def delete_by_token(cls, db: AsyncSession, token: str) -> int:
        result = await db.execute(delete(cls.model).where(cls.model.token == token))
        await db.commit()
        return result.rowcount


__all__ = [
    "UserSessionDAO",
]
