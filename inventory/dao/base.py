from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select


class BaseDAO:
    model = None

    @classmethod
    async def find_one_or_none_by_id(cls, db: AsyncSession, data_id: int):
        result = await db.execute(select(cls.model).where(cls.model.id == data_id))
        return result.scalar_one_or_none()

    @classmethod
    async def add(cls, db: AsyncSession, **values):
        new_instance = cls.model(**values)
        db.add(new_instance)
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise e
        await db.refresh(new_instance)
        return new_instance
