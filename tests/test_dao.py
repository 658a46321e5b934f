import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.dao import ProductDAO, UserDAO


@pytest_asyncio.fixture
async def owners(db_session: AsyncSession):
    alice = await UserDAO.add(db_session, username="alice", email="alice@example.com", password="x")
    bob = await UserDAO.add(db_session, username="bob", email="bob@example.com", password="x")
    return alice, bob


@pytest.mark.asyncio
async def test_find_by_username_or_email(db_session: AsyncSession, owners):
    alice, _ = owners
    assert (await UserDAO.find_by_username_or_email(db_session, "alice", "new@example.com")).id == alice.id
    assert (await UserDAO.find_by_username_or_email(db_session, "newname", "alice@example.com")).id == alice.id
    assert await UserDAO.find_by_username_or_email(db_session, "carol", "carol@example.com") is None


@pytest.mark.asyncio
async def test_search_by_name_loads_owner(db_session: AsyncSession, owners):
    alice, bob = owners
    await ProductDAO.add(db_session, name="Hammer", user_id=alice.id)
    await ProductDAO.add(db_session, name="Sledgehammer", user_id=bob.id)
    await ProductDAO.add(db_session, name="Saw", user_id=bob.id)

    found = await ProductDAO.search_by_name(db_session, "hammer")
    assert [p.name for p in found] == ["Hammer", "Sledgehammer"]
    assert [p.owner.username for p in found] == ["alice", "bob"]

    assert len(await ProductDAO.search_by_name(db_session, "")) == 3
    assert await ProductDAO.search_by_name(db_session, "drill") == []


@pytest.mark.asyncio
async def test_find_by_owner(db_session: AsyncSession, owners):
    alice, bob = owners
    await ProductDAO.add(db_session, name="Pen", user_id=alice.id)
    await ProductDAO.add(db_session, name="Ink", user_id=bob.id)

    mine = await ProductDAO.find_by_owner(db_session, alice.id)
    assert [p.name for p in mine] == ["Pen"]


@pytest.mark.asyncio
async def test_owned_mutations_match_on_owner(db_session: AsyncSession, owners):
    alice, bob = owners
    product = await ProductDAO.add(db_session, name="Clock", price=10.0, user_id=alice.id)

    assert await ProductDAO.update_owned(db_session, product.id, bob.id, name="Taken") == 0
    assert await ProductDAO.delete_owned(db_session, product.id, bob.id) == 0
    assert (await ProductDAO.find_one_or_none_by_id(db_session, product.id)).name == "Clock"

    assert await ProductDAO.update_owned(db_session, product.id, alice.id, name="Wall clock") == 1
    assert (await ProductDAO.find_one_or_none_by_id(db_session, product.id)).name == "Wall clock"

    assert await ProductDAO.delete_owned(db_session, product.id, alice.id) == 1
    assert await ProductDAO.find_one_or_none_by_id(db_session, product.id) is None
