"""
Servicio de eventos: arma la vista agregada (evento + precios + galería)
a partir de tres colecciones independientes.

No hay transacción entre colecciones: al crear un evento sus precios y
galería se guardan después del evento (consistencia eventual, no atómica).
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from services.event_management.models.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    EventView,
    EventListing,
    EventCard,
    PriceResponse,
    GalleryResponse,
)
from services.event_management.services.pagination import page_offset, partition_by_start
from services.event_management.stores.event_store import EventStore
from services.event_management.stores.price_store import PriceStore
from services.event_management.stores.gallery_store import GalleryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateResult:
    affected_rows: int

    @property
    def success(self) -> bool:
        return self.affected_rows > 0


class EventService:
    """Servicio para gestionar eventos y su vista agregada"""

    def __init__(
        self,
        events: EventStore,
        prices: PriceStore,
        galleries: GalleryStore,
        cascade_delete: bool = True,
    ):
        self.events = events
        self.prices = prices
        self.galleries = galleries
        self.cascade_delete = cascade_delete

    async def create_event(self, principal: Dict, payload: EventCreate) -> EventView:
        """
        Crear evento con sus precios y galería.

        El evento queda a nombre de principal["user_id"], guardado como texto
        (un id numérico 42 se guarda y se devuelve como "42"). Todas las filas
        hijas se esperan (gather) antes de devolver la vista, también cuando
        alguna falla; en ese caso se relanza el primer StoreFailure.
        """
        event = await self.events.create(
            user_id=str(principal["user_id"]),
            title=payload.title,
            description=payload.description,
            image=payload.image,
            location=payload.location,
            start_date=payload.start_date,
            end_date=payload.end_date,
        )
        logger.info(f"Event {event.id} created by user {event.user_id}")

        price_tasks = [
            self.prices.create(
                event_id=event.id,
                tier=tier.tier,
                amount=tier.amount,
                currency=tier.currency,
                order_amount=0,
                attributes=tier.attributes,
            )
            for tier in payload.prices
        ]
        gallery_tasks = [
            self.galleries.create(
                event_id=event.id,
                url=item.url,
                caption=item.caption,
                media_type=item.media_type,
                attributes=item.attributes,
            )
            for item in payload.gallery
        ]

        # Se espera a todas las escrituras aunque alguna falle
        children = await asyncio.gather(*price_tasks, *gallery_tasks, return_exceptions=True)
        failures = [c for c in children if isinstance(c, BaseException)]
        if failures:
            logger.error(f"Event {event.id} saved with {len(failures)} failed child writes")
            raise failures[0]

        prices = children[:len(price_tasks)]
        gallery = children[len(price_tasks):]

        return self._build_view(event, prices, gallery)

    async def update_event(self, event_id: str, payload: EventUpdate) -> UpdateResult:
        """Actualización parcial. No toca precios ni galería"""
        fields = payload.model_dump(exclude_unset=True)
        affected = await self.events.update(event_id, fields)
        if not affected:
            logger.info(f"Update on event {event_id} changed no rows")
        return UpdateResult(affected_rows=affected)

    async def delete_event(self, event_id: str) -> int:
        """
        Eliminar evento. Con cascade_delete también elimina sus precios y
        galería; si eso falla el evento ya está eliminado y los hijos quedan
        huérfanos.
        """
        affected = await self.events.delete(event_id)
        if affected and self.cascade_delete:
            removed = await asyncio.gather(
                self.prices.delete_by_event(event_id),
                self.galleries.delete_by_event(event_id),
            )
            logger.info(f"Event {event_id} deleted with {removed[0]} prices and {removed[1]} gallery items")
        return affected

    async def get_event(self, event_id: str) -> Optional[EventView]:
        event = await self.events.get(event_id)
        if event is None:
            return None
        return await self._with_children(event)

    async def list_events(self, page: int, limit: int, now: datetime) -> EventListing:
        """
        Eventos con start_date >= now, paginados, con precios y galería.

        past/upcoming se calculan con el mismo `now` sobre un conjunto ya
        filtrado a futuros, así que past queda vacío salvo que el store
        devuelva algo anterior a now.
        """
        events = await self.events.find_upcoming(now, limit=limit, offset=page_offset(page, limit))
        return await self._listing(events, page, limit, now)

    async def search_events(self, query: str, page: int, limit: int, now: datetime) -> EventListing:
        """Eventos futuros cuyo título o descripción contiene query"""
        query = (query or "").strip()
        offset = page_offset(page, limit)
        if query:
            events = await self.events.search_upcoming(query, now, limit=limit, offset=offset)
        else:
            events = await self.events.find_upcoming(now, limit=limit, offset=offset)
        return await self._listing(events, page, limit, now)

    async def get_card(self, event_id: str) -> Optional[EventCard]:
        """Vista resumida para tarjetas: portada = primer item de galería"""
        view = await self.get_event(event_id)
        if view is None:
            return None
        cover = next((item.url for item in view.gallery if item.url), None)
        return EventCard(
            id=view.id,
            title=view.title,
            image=view.image,
            location=view.location,
            start_date=view.start_date,
            end_date=view.end_date,
            cover=cover,
            prices=[
                {"id": p.id, "tier": p.tier, "amount": p.amount, "currency": p.currency}
                for p in view.prices
            ],
        )

    async def _listing(self, events: List, page: int, limit: int, now: datetime) -> EventListing:
        # gather conserva el orden de entrada, no el de finalización
        views = await asyncio.gather(*(self._with_children(event) for event in events))
        past, upcoming = partition_by_start(views, now)
        return EventListing(
            events=list(views),
            past=past,
            upcoming=upcoming,
            page=page,
            limit=limit,
        )

    async def _with_children(self, event) -> EventView:
        # Precios y luego galería, en secuencia para un mismo evento
        prices = await self.prices.find_by_event(event.id)
        gallery = await self.galleries.find_by_event(event.id)

        incomplete = not (prices.ok and gallery.ok)
        if incomplete:
            failed = [r.error.operation for r in (prices, gallery) if not r.ok]
            logger.warning(f"Event {event.id} served without related records: {', '.join(failed)}")

        return self._build_view(event, prices.items, gallery.items, incomplete=incomplete)

    @staticmethod
    def _build_view(event, prices, gallery, incomplete: bool = False) -> EventView:
        base = EventResponse.model_validate(event)
        return EventView(
            **base.model_dump(),
            prices=[PriceResponse.model_validate(p) for p in prices if p.event_id == event.id],
            gallery=[GalleryResponse.model_validate(g) for g in gallery if g.event_id == event.id],
            incomplete=incomplete,
        )
