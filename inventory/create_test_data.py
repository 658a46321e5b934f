import asyncio

from inventory.db.base import Base, async_session_maker, engine
from inventory.models import User, Product
from inventory.utils.auth import get_password_hash


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        demo_user = User(
            username="demo",
            email="demo@example.com",
            password=get_password_hash("demo_password"),
        )
        session.add(demo_user)
        await session.commit()

        products = [
            Product(name="Desk lamp", description="LED, warm white", price=24.9),
            Product(name="Office chair", description="Mesh back, adjustable", price=129.0),
            Product(name="Notebook", description="A5, dotted", price=4.5),
            Product(name="Cable ties", description=None, price=None),
        ]
        for product in products:
            product.user_id = demo_user.id
        session.add_all(products)
        await session.commit()


if __name__ == "__main__":
    asyncio.run(init_db())
    print("Test data created successfully!")
