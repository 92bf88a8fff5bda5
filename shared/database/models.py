"""Modelos SQLAlchemy: eventos, precios, galería y asistentes.

Precios y galería referencian al evento por event_id sin foreign key:
son colecciones independientes que el EventService une al armar la vista.
"""
from sqlalchemy import Column, String, Integer, DateTime, Numeric, Text, JSON
from sqlalchemy.sql import func
import uuid
from shared.database.connection import Base


def generate_id() -> str:
    """ID opaco globalmente único"""
    return str(uuid.uuid4())


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String, nullable=False, index=True)  # user_id del principal que lo creó
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String, nullable=True)
    location = Column(String, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date = Column(DateTime(timezone=True), nullable=True)  # Sin default
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Price(Base):
    __tablename__ = "prices"

    id = Column(String(36), primary_key=True, default=generate_id)
    event_id = Column(String(36), nullable=False, index=True)
    tier = Column(String, nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(8), nullable=True)
    order_amount = Column(Integer, nullable=False, default=0, server_default="0")  # Unidades vendidas
    attributes = Column(JSON, nullable=False, default=dict)  # Campos extra del caller
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Gallery(Base):
    __tablename__ = "galleries"

    id = Column(String(36), primary_key=True, default=generate_id)
    event_id = Column(String(36), nullable=False, index=True)
    url = Column(String, nullable=True)
    caption = Column(String, nullable=True)
    media_type = Column(String, nullable=True)  # image, video
    attributes = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Attendee(Base):
    __tablename__ = "attendees"

    id = Column(String(36), primary_key=True, default=generate_id)
    event_id = Column(String(36), nullable=False, index=True)
    price_id = Column(String(36), nullable=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
