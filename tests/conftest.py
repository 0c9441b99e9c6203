import os

os.environ["MARKETING_ENVIRONMENT"] = "test"
os.environ["MARKETING_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["MARKETING_CREATE_TABLES"] = "false"
os.environ.pop("MARKETING_OPENAI_API_KEY", None)

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.models import Base
from app.db.session import get_session
from app.main import create_app
from routers.generate import get_content_generator
from services.content_generator import ContentGenerationError
from services.prompt_builder import ContentRequest

API_PREFIX = "/api/v1"
BASE_URL = f"http://testserver{API_PREFIX}"
USER_ID = "user-1"


class FakeGenerator:
    def __init__(self, text: str = "दिवाली की शुभकामनाएं! 🎉 #Diwali") -> None:
        self.text = text
        self.error: Exception | None = None
        self.requests: list[ContentRequest] = []

    async def generate(self, request: ContentRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.text

    def fail_with(self, message: str) -> None:
        self.error = ContentGenerationError(message)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def app(session_factory, fake_generator):
    app = create_app()

    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_content_generator] = lambda: fake_generator
    return app


@pytest.fixture
def transport(app):
    return httpx.ASGITransport(app=app)


@pytest_asyncio.fixture
async def client(transport):
    async with httpx.AsyncClient(
        transport=transport,
        base_url=BASE_URL,
        headers={"X-User-Id": USER_ID},
    ) as client:
        yield client


@pytest.fixture
def make_payload():
    def _make(**overrides):
        payload = {
            "content_type": "social_media_post",
            "product_service": "Diwali Thali",
            "key_message": "20% off",
            "target_audience": "Families",
            "tone": "exciting",
            "language": "Hindi",
            "generated_text": "दिवाली थाली अब 20% छूट पर!",
            "festival_context": "Diwali",
        }
        payload.update(overrides)
        return payload

    return _make
