"""Rutas de gestión de eventos"""
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import async_sessionmaker
from typing import Dict
import logging

from app.core.config import settings
from shared.auth.dependencies import get_current_user
from shared.database.session import get_session_factory
from shared.errors import StoreFailure
from shared.utils.rate_limiter import limiter, RATE_LIMITS
from shared.utils.responses import envelope
from services.event_management.models.event import EventCreate, EventUpdate, EventListing
from services.event_management.services.event_service import EventService
from services.event_management.services.pagination import utc_now
from services.event_management.stores.event_store import EventStore
from services.event_management.stores.price_store import PriceStore
from services.event_management.stores.gallery_store import GalleryStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_event_service(
    session_maker: async_sessionmaker = Depends(get_session_factory),
) -> EventService:
    return EventService(
        events=EventStore(session_maker),
        prices=PriceStore(session_maker),
        galleries=GalleryStore(session_maker),
        cascade_delete=settings.CASCADE_DELETE_CHILDREN,
    )


def _page_params(
    page: int = Query(1, ge=1, description="Página (desde 1)"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
) -> Dict[str, int]:
    """
    Paginación de listados y búsqueda. limit por defecto es 100 y también es
    el máximo (MAX_PAGE_LIMIT): un valor mayor responde 422 en lugar de
    traer la colección completa en una sola página.
    """
    return {"page": page, "limit": limit}


@router.post("/api/events/create")
async def create_event(
    payload: EventCreate,
    current_user: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    """Crear evento con precios y galería"""
    try:
        view = await service.create_event(current_user, payload)
    except StoreFailure as e:
        logger.error(f"create_event failed: {e.message}")
        return envelope(
            success=False,
            message="Unable to save event",
            error=e.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return envelope(success=True, message="Event created successfully", data=view)


@router.get("/api/events")
async def get_events(
    paging: Dict[str, int] = Depends(_page_params),
    current_user: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    """Eventos próximos paginados, con precios y galería, separados en past/upcoming"""
    now = utc_now()
    try:
        listing = await service.list_events(paging["page"], paging["limit"], now=now)
    except StoreFailure as e:
        logger.error(f"get_events failed: {e.message}")
        return envelope(
            success=False,
            message="Unable to retrieve data",
            data=EventListing(**paging),
            error=e.error_code,
        )

    return envelope(success=True, message="Data retrieved successfully", data=listing)


@router.get("/api/events/search")
async def search_events(
    query: str = Query("", description="Texto a buscar en título o descripción"),
    paging: Dict[str, int] = Depends(_page_params),
    current_user: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    now = utc_now()
    try:
        listing = await service.search_events(query, paging["page"], paging["limit"], now=now)
    except StoreFailure as e:
        logger.error(f"search_events failed: {e.message}")
        return envelope(
            success=False,
            message="Unable to retrieve data",
            data=EventListing(**paging),
            error=e.error_code,
        )

    return envelope(success=True, message="Data retrieved successfully", data=listing)


@router.get("/api/events/{event_id}")
async def get_event(
    event_id: str,
    current_user: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    try:
        view = await service.get_event(event_id)
    except StoreFailure as e:
        logger.error(f"get_event {event_id} failed: {e.message}")
        return envelope(success=False, message="Unable to get event!", error=e.error_code)

    if view is None:
        return envelope(success=False, message="Unable to get event!", error="not_found")

    return envelope(success=True, message="Event retrieved successfully!", data=view)


@router.post("/api/events/{event_id}")
async def update_event(
    event_id: str,
    payload: EventUpdate,
    current_user: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    """Actualización parcial del evento"""
    try:
        result = await service.update_event(event_id, payload)
    except StoreFailure as e:
        logger.error(f"update_event {event_id} failed: {e.message}")
        return envelope(
            success=False,
            message="Unable to update event",
            error=e.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return envelope(
        success=result.success,
        message="Event updated successfully!" if result.success else "No event was updated",
        data={"affected_rows": result.affected_rows},
    )


@router.delete("/api/events/{event_id}")
async def delete_event(
    event_id: str,
    current_user: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    try:
        affected = await service.delete_event(event_id)
    except StoreFailure as e:
        logger.error(f"delete_event {event_id} failed: {e.message}")
        return envelope(
            success=False,
            message="Unable to delete event",
            error=e.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return envelope(
        success=affected > 0,
        message="Event deleted successfully!" if affected else "Unable to delete event",
        data={"affected_rows": affected},
    )


@router.post("/api/events/{event_id}/get-cards")
@limiter.limit(RATE_LIMITS["public"])
async def get_requested_cards(
    request: Request,
    event_id: str,
    service: EventService = Depends(get_event_service),
):
    """Vista tipo tarjeta del evento. Endpoint público (no requiere autenticación)"""
    try:
        card = await service.get_card(event_id)
    except StoreFailure as e:
        logger.error(f"get_card {event_id} failed: {e.message}")
        return envelope(success=False, message="Unable to get event!", error=e.error_code)

    if card is None:
        return envelope(success=False, message="Unable to get event!", error="not_found")

    return envelope(success=True, message="Event retrieved successfully!", data=card)
