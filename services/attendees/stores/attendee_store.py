"""Store adapter de asistentes"""
from typing import List

from shared.database.models import Attendee
from services.event_management.stores.base import StoreAdapter


class AttendeeStore(StoreAdapter[Attendee]):
    model = Attendee

    async def find_by_event(self, event_id: str) -> List[Attendee]:
        return await self.find(Attendee.event_id == event_id, order_by=(Attendee.created_at.asc(),))
