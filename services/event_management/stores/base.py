"""
Store adapter genérico: CRUD + consultas por predicado sobre un modelo.

Cada operación abre su propia sesión, así las consultas concurrentes
(fan-out con asyncio.gather) nunca comparten una AsyncSession.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar
import logging

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from shared.errors import StoreFailure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class StoreResult:
    """Resultado de una consulta que no lanza: items o el error del store"""
    items: List[Any] = field(default_factory=list)
    error: Optional[StoreFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StoreAdapter(Generic[ModelT]):
    """CRUD sobre una colección. Los errores del store se relanzan como StoreFailure"""

    model: Type[ModelT]

    def __init__(self, session_maker: async_sessionmaker):
        self._session_maker = session_maker

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _failure(self, operation: str, exc: Exception) -> StoreFailure:
        logger.error(f"Store error on {self.name}.{operation}: {type(exc).__name__}: {exc}")
        return StoreFailure(f"Unable to {operation} {self.name}", operation=f"{self.name}.{operation}")

    async def create(self, **fields) -> ModelT:
        try:
            async with self._session_maker() as session:
                instance = self.model(**fields)
                session.add(instance)
                await session.commit()
                await session.refresh(instance)
                return instance
        except SQLAlchemyError as e:
            raise self._failure("create", e) from e

    async def get(self, record_id: str) -> Optional[ModelT]:
        try:
            async with self._session_maker() as session:
                return await session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._failure("get", e) from e

    async def update(self, record_id: str, fields: Dict[str, Any]) -> int:
        """Actualización parcial. Devuelve filas afectadas (0 si no existe)"""
        if not fields:
            return 0
        try:
            async with self._session_maker() as session:
                stmt = update(self.model).where(self.model.id == record_id).values(**fields)
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount or 0
        except SQLAlchemyError as e:
            raise self._failure("update", e) from e

    async def delete(self, record_id: str) -> int:
        return await self.delete_where(self.model.id == record_id)

    async def delete_where(self, *predicates) -> int:
        try:
            async with self._session_maker() as session:
                result = await session.execute(delete(self.model).where(*predicates))
                await session.commit()
                return result.rowcount or 0
        except SQLAlchemyError as e:
            raise self._failure("delete", e) from e

    async def find(
        self,
        *predicates,
        order_by: Sequence = (),
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ModelT]:
        stmt = select(self.model)
        if predicates:
            stmt = stmt.where(*predicates)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._failure("find", e) from e


class EventChildStore(StoreAdapter[ModelT]):
    """Colección con back-reference event_id (precios, galería)"""

    async def find_by_event(self, event_id: str) -> StoreResult:
        """Todos los registros del evento. Nunca lanza: el error va en el resultado"""
        try:
            items = await self.find(self.model.event_id == event_id, order_by=(self.model.created_at.asc(),))
        except StoreFailure as e:
            return StoreResult(error=e)
        return StoreResult(items=items)

    async def delete_by_event(self, event_id: str) -> int:
        return await self.delete_where(self.model.event_id == event_id)
