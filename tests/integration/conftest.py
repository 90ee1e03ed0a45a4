import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401  registers tables
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.email_sender import IEmailSender
from src.depends import get_email_sender, get_unit_of_work


class IntegrationConfig(ApplicationConfig):
    DEV_MODE = False
    DEV_SESSION_SECRET = "integration-dev-secret"
    APP_BASE_URL = "http://app.test"
    ADMIN_API_KEY = "integration-admin-key"
    EMAIL_BACKEND = "log"
    LOG_LEVEL = "WARNING"


class DevModeConfig(IntegrationConfig):
    DEV_MODE = True


class RecordingEmailSender(IEmailSender):
    """Keeps every outgoing message in memory"""

    def __init__(self):
        self.sent = []

    async def send(self, to: str, subject: str, html_body: str) -> bool:
        self.sent.append({"to": to, "subject": subject, "body": html_body})
        return True


@pytest.fixture
def outbox():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


def _build_app(config, db_session, outbox):
    app = create_app(config)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: outbox
    return app


@pytest_asyncio.fixture
async def client(db_session, outbox):
    app = _build_app(IntegrationConfig, db_session, outbox)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def dev_client(db_session, outbox):
    app = _build_app(DevModeConfig, db_session, outbox)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
