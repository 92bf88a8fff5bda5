"""Servicio de registro de asistentes"""
from typing import List
import logging

from shared.errors import NotFound, ValidationGap
from services.attendees.models.attendee import AttendeeCreate, AttendeeResponse
from services.attendees.stores.attendee_store import AttendeeStore
from services.event_management.stores.event_store import EventStore
from services.event_management.stores.price_store import PriceStore

logger = logging.getLogger(__name__)


class AttendeeService:
    """Servicio para registrar y listar asistentes de un evento"""

    def __init__(self, attendees: AttendeeStore, events: EventStore, prices: PriceStore):
        self.attendees = attendees
        self.events = events
        self.prices = prices

    async def register(self, payload: AttendeeCreate) -> AttendeeResponse:
        """
        Registrar asistente. Si indica price_id, el tier debe pertenecer al
        evento y se incrementa su order_amount.

        Raises:
            NotFound: el evento no existe
            ValidationGap: el price_id no pertenece al evento
        """
        event = await self.events.get(payload.event_id)
        if event is None:
            raise NotFound("Event not found")

        if payload.price_id:
            price = await self.prices.get(payload.price_id)
            if price is None or price.event_id != event.id:
                raise ValidationGap("Price tier does not belong to this event")

        attendee = await self.attendees.create(
            event_id=event.id,
            price_id=payload.price_id,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
        )

        if payload.price_id:
            await self.prices.increment_order_amount(payload.price_id)

        logger.info(f"Attendee {attendee.id} registered for event {event.id}")
        return AttendeeResponse.model_validate(attendee)

    async def list_for_event(self, event_id: str) -> List[AttendeeResponse]:
        attendees = await self.attendees.find_by_event(event_id)
        return [AttendeeResponse.model_validate(a) for a in attendees]
