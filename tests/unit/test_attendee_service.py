"""
Unit tests for AttendeeService.
"""
import pytest

from shared.errors import NotFound, ValidationGap
from services.attendees.models.attendee import AttendeeCreate
from services.attendees.services.attendee_service import AttendeeService
from services.event_management.models.event import EventCreate


@pytest.fixture
def attendee_service(attendee_store, event_store, price_store):
    return AttendeeService(attendee_store, event_store, price_store)


async def create_event_with_tier(event_service, principal):
    return await event_service.create_event(
        principal,
        EventCreate(title="Launch", description="d", start_date="2030-01-01", prices=[{"tier": "vip"}]),
    )


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_increments_tier_order_amount(self, attendee_service, event_service, price_store, principal):
        event = await create_event_with_tier(event_service, principal)
        price_id = event.prices[0].id

        attendee = await attendee_service.register(
            AttendeeCreate(event_id=event.id, name="Ana", email="ana@example.com", price_id=price_id)
        )

        assert attendee.event_id == event.id
        assert price_store.rows[price_id].order_amount == 1

    @pytest.mark.asyncio
    async def test_register_without_tier(self, attendee_service, event_service, price_store, principal):
        event = await create_event_with_tier(event_service, principal)

        await attendee_service.register(AttendeeCreate(event_id=event.id, name="Ana", email="ana@example.com"))

        assert price_store.rows[event.prices[0].id].order_amount == 0

    @pytest.mark.asyncio
    async def test_unknown_event(self, attendee_service):
        with pytest.raises(NotFound):
            await attendee_service.register(AttendeeCreate(event_id="nope", name="Ana", email="ana@example.com"))

    @pytest.mark.asyncio
    async def test_tier_from_another_event_is_rejected(self, attendee_service, event_service, attendee_store, principal):
        first = await create_event_with_tier(event_service, principal)
        second = await create_event_with_tier(event_service, principal)

        with pytest.raises(ValidationGap):
            await attendee_service.register(
                AttendeeCreate(event_id=first.id, name="Ana", email="ana@example.com", price_id=second.prices[0].id)
            )
        assert attendee_store.rows == {}


@pytest.mark.asyncio
async def test_list_for_event(attendee_service, event_service, principal):
    event = await create_event_with_tier(event_service, principal)
    await attendee_service.register(AttendeeCreate(event_id=event.id, name="Ana", email="ana@example.com"))
    await attendee_service.register(AttendeeCreate(event_id=event.id, name="Luis", email="luis@example.com"))

    attendees = await attendee_service.list_for_event(event.id)

    assert [a.name for a in attendees] == ["Ana", "Luis"]
