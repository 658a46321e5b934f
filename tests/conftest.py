import pytest
import pytest_asyncio
from typing import AsyncGenerator, Awaitable, Callable, Optional
from httpx import AsyncClient, ASGITransport, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from inventory.main import app
from inventory.db.base import get_async_db_session, Base
from inventory.models import User, Product

SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "testpassword123"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    TestingSessionLocal = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestingSessionLocal() as session:
        yield session


def _make_client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        yield db_session
    app.dependency_overrides[get_async_db_session] = override_get_db
    async with _make_client() as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def other_client(client: AsyncClient) -> AsyncGenerator[AsyncClient, None]:
    """A second browser with its own cookie jar, sharing the same database."""
    async with _make_client() as ac:
        yield ac


@pytest.fixture
def register() -> Callable[..., Awaitable[Response]]:
    async def _register(
        ac: AsyncClient,
        username: str,
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
    ) -> Response:
        return await ac.post(
            "/register",
            data={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
    return _register


@pytest.fixture
def login() -> Callable[..., Awaitable[Response]]:
    async def _login(
        ac: AsyncClient, username: str, password: str = DEFAULT_PASSWORD
    ) -> Response:
        return await ac.post(
            "/login", data={"username": username, "password": password}
        )
    return _login


@pytest.fixture
def sign_in(register, login) -> Callable[..., Awaitable[None]]:
    async def _sign_in(ac: AsyncClient, username: str) -> None:
        resp = await register(ac, username)
        assert resp.status_code == 303
        resp = await login(ac, username)
        assert resp.status_code == 303
    return _sign_in


@pytest.fixture
def create_product(db_session: AsyncSession) -> Callable[..., Awaitable[int]]:
    async def _create(
        ac: AsyncClient,
        name: str,
        description: str = "",
        price: str = "",
    ) -> int:
        resp = await ac.post(
            "/product/create",
            data={"name": name, "description": description, "price": price},
        )
        assert resp.status_code == 303
        q = await db_session.execute(
            select(Product).where(Product.name == name).order_by(Product.id.desc())
        )
        return q.scalars().first().id
    return _create


@pytest.fixture
def fetch_product(db_session: AsyncSession) -> Callable[[int], Awaitable[Optional[Product]]]:
    async def _fetch(product_id: int) -> Optional[Product]:
        q = await db_session.execute(
            select(Product)
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        return q.scalar_one_or_none()
    return _fetch


@pytest.fixture
def fetch_user(db_session: AsyncSession) -> Callable[[str], Awaitable[Optional[User]]]:
    async def _fetch(username: str) -> Optional[User]:
        q = await db_session.execute(select(User).where(User.username == username))
        return q.scalar_one_or_none()
    return _fetch
