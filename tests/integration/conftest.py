import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.user_repository import UserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credential_verifier import generate_security_stamp
from src.app.use_cases.auth import DeviceInfo
from src.domain.entities import User
from tests.fixtures.json_loader import TestDataLoader


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def uow_factory(session_factory):
    """One unit of work per call, each on its own connection, like separate requests"""
    opened = []

    def make():
        session = session_factory()
        opened.append(session)
        return SqlAlchemyUnitOfWork(session)

    yield make
    for session in opened:
        await session.close()


@pytest_asyncio.fixture
async def users(db_session, test_data, auth_settings):
    """Seed users from test_data.json; returns {email: User}"""
    repo = UserRepository(db_session)
    created = {}
    for row in test_data.users():
        password = row.pop("password")
        stamp = generate_security_stamp()
        user = User(
            **row,
            security_stamp=stamp,
            password_hash=auth_settings.hash_password(password, stamp),
        )
        created[user.email] = await repo.create(user)
    await db_session.commit()
    return created


@pytest_asyncio.fixture
def devices(test_data):
    return {
        name: DeviceInfo(**info) for name, info in test_data.devices().items()
    }
