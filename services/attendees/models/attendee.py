"""Modelos Pydantic para asistentes"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class AttendeeCreate(BaseModel):
    event_id: str
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    price_id: Optional[str] = None  # Tier de precio elegido


class AttendeeResponse(BaseModel):
    id: str
    event_id: str
    price_id: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
