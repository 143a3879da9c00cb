import uuid
from datetime import UTC, datetime

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from featurefest.config import settings

DEMO_BOARD_ID = "f9f8ac71-01fa-445c-858e-e6e7e8308fc6"


class Base(DeclarativeBase):
    pass


engine = create_async_engine(
    settings.database_url,
    echo=False,
    connect_args={"check_same_thread": False},
)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncSession:
    """FastAPI dependency for database sessions."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables and apply pragmas."""
    import featurefest.stub.models  # noqa: F401 — ensure models are registered

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.execute(text("PRAGMA journal_mode = WAL"))
        await conn.execute(text("PRAGMA foreign_keys = ON"))
        await conn.execute(text("PRAGMA busy_timeout = 5000"))

        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_demo_board:
        async with async_session() as session:
            await seed_demo_board(session)
            await session.commit()


async def seed_demo_board(session: AsyncSession) -> None:
    """Create the demo board and a handful of feature requests, once."""
    from featurefest.stub.models import Board, FeatureRequest

    existing = await session.execute(select(Board).where(Board.id == DEMO_BOARD_ID))
    if existing.scalar_one_or_none() is not None:
        return

    now = datetime.now(UTC).isoformat()
    session.add(
        Board(
            id=DEMO_BOARD_ID,
            name="Demo board",
            description="Try out feature requests and upvotes locally.",
            user_id="demo-owner",
            created_at=now,
        )
    )

    seed_features = [
        ("Dark mode", "Add a dark theme that follows the system setting.", "ideas"),
        ("Offline drafts", "Keep unsent feature requests when the network drops.", "ideas"),
        ("Widgets", "Show the most voted requests on the home screen.", "in_progress"),
        ("Email digests", "Weekly summary of new requests and status changes.", "released"),
    ]
    for title, description, status in seed_features:
        session.add(
            FeatureRequest(
                id=str(uuid.uuid4()),
                title=title,
                description=description,
                status=status,
                board_id=DEMO_BOARD_ID,
                user_id="demo-owner",
                created_at=now,
            )
        )
