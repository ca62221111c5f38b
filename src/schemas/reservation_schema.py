"""Reservation and availability data models."""

from typing import Optional

from pydantic import BaseModel, Field

from src.config import settings


class ReservationDraft(BaseModel):
    """Reservation being collected, one field per turn."""
    day: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[int] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class ConfirmedReservation(BaseModel):
    """Snapshot of a fully collected draft, taken when the guest says yes."""
    day: str
    date: str
    time: str
    guests: int = Field(ge=settings.dialog.min_guests, le=settings.dialog.max_guests)
    name: str
    phone: str


class AvailabilityResponse(BaseModel):
    """Table availability check result."""
    available: bool
    alternatives: list[str] = Field(default_factory=list)
