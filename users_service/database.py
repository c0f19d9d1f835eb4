from sqlalchemy import pool
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from fastapi import Request

# Base class for ORM models
Base = declarative_base()


class Database:
    """Async engine plus session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False):
        options = {"future": True, "echo": echo}
        if url.startswith("sqlite"):
            # One connection per session, opened on the running event loop
            options["poolclass"] = pool.NullPool
        self.engine = create_async_engine(url, **options)
        self.session_factory = sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_all(self):
        # Import registers the models on Base.metadata
        from users_service import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()


# Dependency injection for FastAPI routes
async def get_db(request: Request):
    async with request.app.state.db.session_factory() as session:
        yield session
