from typing import Optional, Sequence

from sqlalchemy import update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload

from .base import BaseDAO
from inventory.models import Product


class ProductDAO(BaseDAO):
    """Every query that returns products also loads the owner."""

    model = Product

    @classmethod
    def _select_with_owner(cls):
        return select(cls.model).options(joinedload(cls.model.owner))

    @classmethod
    async def find_one_or_none_by_id(
        cls, db: AsyncSession, data_id: int
    ) -> Optional[Product]:
        result = await db.execute(
            cls._select_with_owner().where(cls.model.id == data_id)
        )
        return result.scalar_one_or_none()

    @classmethod
    async def search_by_name(cls, db: AsyncSession, term: str) -> Sequence[Product]:
        # case-insensitive, LIKE wildcards in the term are escaped
        query = cls._select_with_owner().order_by(cls.model.id)
        if term:
            query = query.where(cls.model.name.icontains(term, autoescape=True))
        result = await db.execute(query)
        return result.scalars().all()

    @classmethod
    async def find_by_owner(cls, db: AsyncSession, user_id: int) -> Sequence[Product]:
        result = await db.execute(
            cls._select_with_owner()
            .where(cls.model.user_id == user_id)
            .order_by(cls.model.id)
        )
        return result.scalars().all()

    @classmethod
    async def find_all(cls, db: AsyncSession) -> Sequence[Product]:
        result = await db.execute(select(cls.model).order_by(cls.model.id))
        return result.scalars().all()

    @classmethod
    async def update_owned(
        cls, db: AsyncSession, product_id: int, user_id: int, **values
    ) -> int:
        """Update a product only if ``user_id`` owns it. Returns rows changed."""
        result = await db.execute(
            update(cls.model)
            .where(cls.model.id == product_id, cls.model.user_id == user_id)
            .values(**values)
        )
        await db.commit()
        return result.rowcount

    @classmethod
    async def delete_owned(cls, db: AsyncSession, product_id: int, user_id: int) -> int:
        result = await db.execute(
            delete(cls.model).where(
                cls.model.id == product_id, cls.model.user_id == user_id
            )
        )
        await db.commit()
        return result.rowcount


__all__ = [
    "ProductDAO",
]
