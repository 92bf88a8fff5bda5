"""Store adapter de precios"""
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from shared.database.models import Price
from services.event_management.stores.base import EventChildStore


class PriceStore(EventChildStore[Price]):
    model = Price

    async def increment_order_amount(self, price_id: str) -> int:
        """order_amount + 1 de forma atómica en la base de datos"""
        try:
            async with self._session_maker() as session:
                stmt = (
                    update(Price)
                    .where(Price.id == price_id)
                    .values(order_amount=Price.order_amount + 1)
                )
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount or 0
        except SQLAlchemyError as e:
            raise self._failure("increment_order_amount", e) from e
