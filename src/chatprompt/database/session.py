from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from chatprompt.config import get_settings

settings = get_settings()

# Engine creation is lazy: no connection is opened until the first query.
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQLALCHEMY_ECHO,   # Set to False in production
    pool_pre_ping=True,              # Enables connection health checks
)

# expire_on_commit=False: services commit between dispatch steps and keep
# using the returned entities afterwards.
AsyncSessionMaker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session and ensure it's closed afterwards.

    Usage:
        async for session in get_async_session():
            service = get_prompt_service(session)
    """
    async with AsyncSessionMaker() as session:
        yield session
