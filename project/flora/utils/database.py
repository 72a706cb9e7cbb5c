# flora/utils/database.py

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base

# ────────────── Base для моделей ──────────────
Base = declarative_base()


# ────────────── Асинхронный движок ──────────────
def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo)


# ────────────── Фабрика сессий ──────────────
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# ────────────── Инициализация базы данных ──────────────
async def init_db(engine: AsyncEngine):
    """
    Создаёт таблицы, если их ещё нет.
    Модели импортируются здесь, чтобы попасть в Base.metadata.
    """
    from flora.models import order  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
