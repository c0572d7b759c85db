import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notification_dispatcher import (
    INotificationDispatcher,
    InvitationNotification,
)
from src.depends import get_notification_dispatcher, get_unit_of_work


class RecordingNotifier(INotificationDispatcher):
    """Keeps every notification so tests can read the delivered token"""

    def __init__(self):
        self.sent: list[InvitationNotification] = []

    async def send_invitation(self, notification: InvitationNotification) -> None:
        self.sent.append(notification)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
async def client(db_session, notifier):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notification_dispatcher] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url=f"http://test{ApplicationConfig.API_PREFIX}/"
    ) as ac:
        yield ac
