"""Rutas de asistentes (públicas)"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import async_sessionmaker
import logging

from shared.database.session import get_session_factory
from shared.errors import StoreFailure
from shared.utils.rate_limiter import limiter, RATE_LIMITS
from shared.utils.responses import envelope
from services.attendees.models.attendee import AttendeeCreate
from services.attendees.services.attendee_service import AttendeeService
from services.attendees.stores.attendee_store import AttendeeStore
from services.event_management.stores.event_store import EventStore
from services.event_management.stores.price_store import PriceStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_attendee_service(
    session_maker: async_sessionmaker = Depends(get_session_factory),
) -> AttendeeService:
    return AttendeeService(
        attendees=AttendeeStore(session_maker),
        events=EventStore(session_maker),
        prices=PriceStore(session_maker),
    )


@router.post("/api/attendee/create")
@limiter.limit(RATE_LIMITS["public"])
async def create_attendee(
    request: Request,
    payload: AttendeeCreate,
    service: AttendeeService = Depends(get_attendee_service),
):
    """Registrar asistente. NotFound / ValidationGap los responde el gateway"""
    try:
        attendee = await service.register(payload)
    except StoreFailure as e:
        logger.error(f"create_attendee failed: {e.message}")
        return envelope(
            success=False,
            message="Unable to register attendee",
            error=e.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return envelope(success=True, message="Attendee registered successfully", data=attendee)


@router.get("/api/attendees/{event_id}")
async def get_attendees(
    event_id: str,
    service: AttendeeService = Depends(get_attendee_service),
):
    """Asistentes de un evento"""
    try:
        attendees = await service.list_for_event(event_id)
    except StoreFailure as e:
        logger.error(f"get_attendees {event_id} failed: {e.message}")
        return envelope(success=False, message="Unable to retrieve data", data=[], error=e.error_code)

    return envelope(success=True, message="Data retrieved successfully", data=attendees)
