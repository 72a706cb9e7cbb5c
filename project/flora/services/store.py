# flora/services/store.py

"""
Хранилища заказов.

OrderStore - контракт шлюза к хранилищу: put() сохраняет заказ и возвращает
его идентификатор, query() возвращает заказы от новых к старым. Любая ошибка
хранилища поднимается как PersistenceError с исходным сообщением.
"""

import asyncio
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from flora.errors import PersistenceError
from flora.models.order import OrderRecord
from flora.schemas.order import Order


class OrderStore(ABC):
    @abstractmethod
    async def put(self, order: Order) -> str:
        """Сохраняет заказ, возвращает идентификатор записи."""

    @abstractmethod
    async def query(self, customer_id: Optional[str] = None) -> list[Order]:
        """Заказы (все или одного клиента), сначала самые новые."""


# ────────────── В памяти ──────────────
class InMemoryOrderStore(OrderStore):
    """Хранилище в памяти процесса, для тестов и локального запуска."""

    def __init__(self):
        self._orders: list[Order] = []
        self._lock = asyncio.Lock()

    async def put(self, order: Order) -> str:
        record_id = uuid.uuid4().hex
        async with self._lock:
            self._orders.append(order.model_copy(update={"id": record_id}, deep=True))
        return record_id

    async def query(self, customer_id: Optional[str] = None) -> list[Order]:
        async with self._lock:
            indexed = [
                (position, order) for position, order in enumerate(self._orders)
                if customer_id is None or order.customer_id == customer_id
            ]
        # при равном времени создания позже добавленный идёт первым
        indexed.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [order.model_copy(deep=True) for _, order in indexed]


# ────────────── SQLAlchemy ──────────────
class SqlOrderStore(OrderStore):
    """Документное хранение заказов в таблице через асинхронный SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def put(self, order: Order) -> str:
        record = OrderRecord(
            order_number=order.order_number,
            customer_id=order.customer_id,
            created_at=order.created_at,
            updated_at=order.updated_at,
            document=order.model_dump(mode="json", by_alias=True, exclude={"id"}),
        )
        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return str(record.id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to save order to database: {exc}") from exc

    async def query(self, customer_id: Optional[str] = None) -> list[Order]:
        statement = select(OrderRecord)
        if customer_id is not None:
            statement = statement.where(OrderRecord.customer_id == customer_id)
        statement = statement.order_by(OrderRecord.created_at.desc(), OrderRecord.id.desc())

        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                records = result.scalars().all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to fetch orders from database: {exc}") from exc

        return [Order.model_validate({**record.document, "id": str(record.id)}) for record in records]
