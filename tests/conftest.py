"""Shared fixtures.

Two kinds of backend are used:

- ``httpx.MockTransport`` with a :class:`Recorder` for exact control over
  status codes and bodies in client tests.
- The stub FastAPI app over ``httpx.ASGITransport``, backed by a per-test
  SQLite file, for end-to-end flows.
"""

import json
import uuid
from datetime import UTC, datetime

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import featurefest.stub.models  # noqa: F401 — register tables on Base.metadata
from featurefest.client import FeaturefestClient
from featurefest.stub.db import Base, get_db
from featurefest.stub.main import create_app
from featurefest.stub.models import Board, FeatureRequest, FeatureVote

BASE_URL = "http://testserver/rest/v1"
MOCK_BASE_URL = "https://example.test/rest/v1"
MOCK_BOARD_ID = "board-1"


# ---------------------------------------------------------------------------
# Mock transport
# ---------------------------------------------------------------------------


class Recorder:
    """MockTransport handler that replays queued responses and keeps the requests."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def methods(self) -> list[str]:
        return [request.method for request in self.requests]


def json_response(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def empty_response(status_code: int = 204) -> httpx.Response:
    return httpx.Response(status_code)


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)


def feature_payload(**overrides) -> dict:
    payload = {
        "id": "feat-1",
        "title": "Dark mode",
        "description": "Add dark theme",
        "status": "ideas",
        "board_id": MOCK_BOARD_ID,
        "user_id": "u1",
        "created_at": "2025-01-15T10:30:00+00:00",
        "updated_at": None,
        "upvotes": 0,
        "downvotes": 0,
        "total_votes": 0,
    }
    payload.update(overrides)
    return payload


def vote_payload(**overrides) -> dict:
    payload = {
        "id": "vote-1",
        "feature_id": "feat-1",
        "user_id": "u1",
        "vote_type": "up",
        "created_at": "2025-01-15T10:31:00+00:00",
        "updated_at": None,
    }
    payload.update(overrides)
    return payload


def board_payload(**overrides) -> dict:
    payload = {
        "id": MOCK_BOARD_ID,
        "name": "Roadmap",
        "description": "What we build next",
        "user_id": "owner-1",
        "created_at": "2025-01-01T00:00:00+00:00",
        "updated_at": None,
    }
    payload.update(overrides)
    return payload


def mock_client(recorder: Recorder, **kwargs) -> FeaturefestClient:
    kwargs.setdefault("api_key", MOCK_BOARD_ID)
    return FeaturefestClient(
        base_url=MOCK_BASE_URL,
        service_key="anon-key",
        transport=httpx.MockTransport(recorder),
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Stub backend
# ---------------------------------------------------------------------------


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'stub.db'}",
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory):
    app = create_app()

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    return app


@pytest.fixture
async def client(app) -> httpx.AsyncClient:
    """Raw HTTP client against the stub app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
async def board(db: AsyncSession) -> Board:
    board = await create_board(db, name="Roadmap")
    await db.commit()
    return board


@pytest.fixture
async def sdk(app, board: Board) -> FeaturefestClient:
    """SDK client pointed at the stub app and the ``board`` fixture."""
    async with FeaturefestClient(
        api_key=board.id,
        base_url=BASE_URL,
        service_key="",
        transport=httpx.ASGITransport(app=app),
    ) as c:
        yield c


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------


def _now() -> str:
    return datetime.now(UTC).isoformat()


async def create_board(
    db: AsyncSession,
    name: str = "Board",
    board_id: str | None = None,
    user_id: str = "owner-1",
    description: str | None = None,
) -> Board:
    board = Board(
        id=board_id or str(uuid.uuid4()),
        name=name,
        description=description,
        user_id=user_id,
        created_at=_now(),
    )
    db.add(board)
    await db.flush()
    return board


async def create_feature(
    db: AsyncSession,
    board_id: str,
    title: str = "Feature",
    description: str = "Description",
    status: str = "ideas",
    user_id: str | None = None,
    created_at: str | None = None,
) -> FeatureRequest:
    feature = FeatureRequest(
        id=str(uuid.uuid4()),
        title=title,
        description=description,
        status=status,
        board_id=board_id,
        user_id=user_id,
        created_at=created_at or _now(),
    )
    db.add(feature)
    await db.flush()
    return feature


async def create_vote(
    db: AsyncSession,
    feature_id: str,
    user_id: str,
    vote_type: str = "up",
) -> FeatureVote:
    vote = FeatureVote(
        id=str(uuid.uuid4()),
        feature_id=feature_id,
        user_id=user_id,
        vote_type=vote_type,
        created_at=_now(),
    )
    db.add(vote)
    await db.flush()
    return vote
