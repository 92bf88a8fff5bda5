"""
Shared pytest fixtures.

Los store adapters se reemplazan por versiones en memoria con la misma
interfaz; así el EventService y las rutas se prueban sin base de datos.
"""
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Dict, List

import httpx
import pytest

from shared.database.models import Event, Price, Gallery, Attendee, generate_id
from shared.errors import StoreFailure
from services.event_management.services.event_service import EventService
from services.event_management.services.pagination import as_utc
from services.event_management.stores.base import StoreResult

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

_clock = count()


class InMemoryStore:
    """Misma interfaz que StoreAdapter, guardando instancias ORM en un dict"""

    model = None

    def __init__(self):
        self.rows: Dict[str, object] = {}
        self.fail_on = set()  # nombres de operación que deben lanzar StoreFailure

    def _check(self, operation: str):
        if operation in self.fail_on:
            raise StoreFailure(f"Unable to {operation}", operation=f"{self.model.__tablename__}.{operation}")

    async def create(self, **fields):
        self._check("create")
        fields.setdefault("id", generate_id())
        fields.setdefault("created_at", NOW + timedelta(microseconds=next(_clock)))
        instance = self.model(**fields)
        self.rows[instance.id] = instance
        return instance

    async def get(self, record_id):
        self._check("get")
        return self.rows.get(record_id)

    async def update(self, record_id, fields):
        self._check("update")
        instance = self.rows.get(record_id)
        if instance is None or not fields:
            return 0
        for key, value in fields.items():
            setattr(instance, key, value)
        return 1

    async def delete(self, record_id):
        self._check("delete")
        return 1 if self.rows.pop(record_id, None) is not None else 0


class InMemoryEventStore(InMemoryStore):
    model = Event

    def _upcoming(self, now):
        items = [e for e in self.rows.values() if as_utc(e.start_date) >= now]
        return sorted(items, key=lambda e: (as_utc(e.start_date), e.id))

    async def find_upcoming(self, now, limit, offset):
        self._check("find")
        return self._upcoming(now)[offset:offset + limit]

    async def search_upcoming(self, query, now, limit, offset):
        self._check("find")
        needle = query.lower()
        items = [
            e for e in self._upcoming(now)
            if needle in (e.title or "").lower() or needle in (e.description or "").lower()
        ]
        return items[offset:offset + limit]


class InMemoryChildStore(InMemoryStore):
    async def find_by_event(self, event_id) -> StoreResult:
        try:
            self._check("find")
        except StoreFailure as e:
            return StoreResult(error=e)
        items = [r for r in self.rows.values() if r.event_id == event_id]
        return StoreResult(items=sorted(items, key=lambda r: r.created_at))

    async def delete_by_event(self, event_id) -> int:
        self._check("delete")
        ids = [k for k, r in self.rows.items() if r.event_id == event_id]
        for k in ids:
            del self.rows[k]
        return len(ids)


class InMemoryPriceStore(InMemoryChildStore):
    model = Price

    async def increment_order_amount(self, price_id):
        price = self.rows.get(price_id)
        if price is None:
            return 0
        price.order_amount += 1
        return 1


class InMemoryGalleryStore(InMemoryChildStore):
    model = Gallery


class InMemoryAttendeeStore(InMemoryStore):
    model = Attendee

    async def find_by_event(self, event_id) -> List:
        self._check("find")
        return [a for a in self.rows.values() if a.event_id == event_id]


@pytest.fixture
def event_store():
    return InMemoryEventStore()


@pytest.fixture
def price_store():
    return InMemoryPriceStore()


@pytest.fixture
def gallery_store():
    return InMemoryGalleryStore()


@pytest.fixture
def attendee_store():
    return InMemoryAttendeeStore()


@pytest.fixture
def event_service(event_store, price_store, gallery_store):
    return EventService(event_store, price_store, gallery_store, cascade_delete=True)


@pytest.fixture
def principal():
    return {"user_id": "usr-123", "email": "organizer@example.com", "name": "Organizer"}


VALID_CREDENTIAL = "Bearer valid-token"


def identity_handler(request: httpx.Request) -> httpx.Response:
    """Servicio de identidad simulado: solo acepta VALID_CREDENTIAL"""
    if request.headers.get("Authorization") == VALID_CREDENTIAL:
        return httpx.Response(
            200,
            json={"success": "true", "data": {"user": {"user_id": "usr-123", "email": "organizer@example.com"}}},
        )
    return httpx.Response(401, json={"success": "false", "message": "Invalid token"})


@pytest.fixture
def identity_transport():
    return httpx.MockTransport(identity_handler)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def valid_credential():
    return VALID_CREDENTIAL
