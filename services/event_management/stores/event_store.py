"""Store adapter de eventos"""
from datetime import datetime
from typing import List

from sqlalchemy import or_

from shared.database.models import Event
from services.event_management.stores.base import StoreAdapter


def escape_like(value: str) -> str:
    """Escapar comodines de LIKE para búsquedas literales"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class EventStore(StoreAdapter[Event]):
    model = Event

    async def find_upcoming(self, now: datetime, limit: int, offset: int) -> List[Event]:
        """Eventos con start_date >= now, orden estable por fecha de inicio"""
        return await self.find(
            Event.start_date >= now,
            order_by=(Event.start_date.asc(), Event.id.asc()),
            limit=limit,
            offset=offset,
        )

    async def search_upcoming(self, query: str, now: datetime, limit: int, offset: int) -> List[Event]:
        """Eventos futuros cuyo título o descripción contiene query (sin distinguir mayúsculas)"""
        pattern = f"%{escape_like(query)}%"
        return await self.find(
            Event.start_date >= now,
            or_(
                Event.title.ilike(pattern, escape="\\"),
                Event.description.ilike(pattern, escape="\\"),
            ),
            order_by=(Event.start_date.asc(), Event.id.asc()),
            limit=limit,
            offset=offset,
        )
