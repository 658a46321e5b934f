from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from .base import BaseDAO
from inventory.models import User


class UserDAO(BaseDAO):
    model = User

    @classmethod
    async def find_by_username(cls, db: AsyncSession, username: str):
        result = await db.execute(
            select(cls.model).where(cls.model.username == username)
        )
        return result.scalar_one_or_none()

    @classmethod
    async def find_by_username_or_email(
        cls, db: AsyncSession, username: str, email: str
    ):
        result = await db.execute(
            select(cls.model).where(
                or_(cls.model.username == username, cls.model.email == email)
            )
        )
        return result.scalars().first()


__all__ = [
    "UserDAO",
]
