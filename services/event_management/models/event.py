"""Modelos Pydantic para eventos, precios y galería"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal

from services.event_management.services.pagination import as_utc


def _parse_datetime(value: Any) -> Any:
    """Aceptar fechas sin hora ("2030-01-01") como medianoche"""
    if isinstance(value, str) and len(value) == 10:
        return f"{value}T00:00:00"
    return value


class ExtensibleRecord(BaseModel):
    """
    Registro con un esquema fijo pequeño. Las claves desconocidas que envía
    el caller se mueven a `attributes` en lugar de ampliar el esquema.
    """
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_extra_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = set(cls.model_fields)
        extra = {k: v for k, v in data.items() if k not in known}
        if not extra:
            return data
        attributes = data.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise ValueError("attributes must be an object")
        cleaned = {k: v for k, v in data.items() if k in known}
        cleaned["attributes"] = {**extra, **attributes}
        return cleaned


class PriceTierIn(ExtensibleRecord):
    tier: Optional[str] = None
    amount: Optional[Decimal] = None
    currency: Optional[str] = None


class GalleryItemIn(ExtensibleRecord):
    url: Optional[str] = None
    caption: Optional[str] = None
    media_type: Optional[str] = None


class EventCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str
    start_date: datetime
    end_date: Optional[datetime] = None
    image: Optional[str] = None
    location: Optional[str] = None
    prices: List[PriceTierIn] = []
    gallery: List[GalleryItemIn] = []

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return _parse_datetime(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class EventUpdate(BaseModel):
    """Actualización parcial: solo se aplican los campos enviados"""
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    image: Optional[str] = None
    location: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return _parse_datetime(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @field_validator("title", "description", "start_date")
    @classmethod
    def not_null(cls, v):
        # Campos NOT NULL: se pueden omitir pero no enviar como null
        if v is None:
            raise ValueError("field cannot be null")
        return v


class PriceResponse(BaseModel):
    id: str
    event_id: str
    tier: Optional[str] = None
    amount: Optional[Decimal] = None
    currency: Optional[str] = None
    order_amount: int = 0
    attributes: Dict[str, Any] = {}

    class Config:
        from_attributes = True


class GalleryResponse(BaseModel):
    id: str
    event_id: str
    url: Optional[str] = None
    caption: Optional[str] = None
    media_type: Optional[str] = None
    attributes: Dict[str, Any] = {}

    class Config:
        from_attributes = True


class EventResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    location: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EventView(EventResponse):
    """Vista agregada: campos del evento + sus precios y galería"""
    prices: List[PriceResponse] = []
    gallery: List[GalleryResponse] = []
    # True si alguna consulta de precios/galería falló y la lista está vacía por eso
    incomplete: bool = False


class EventListing(BaseModel):
    events: List[EventView] = []
    past: List[EventView] = []
    upcoming: List[EventView] = []
    page: int = 1
    limit: int = 100


class EventCard(BaseModel):
    id: str
    title: str
    image: Optional[str] = None
    location: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    cover: Optional[str] = None
    prices: List[Dict[str, Any]] = []
