from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime

from .models import AppointmentStatus

class AppointmentCreate(BaseModel):
    pet_id: int = Field(gt=0)
    vet_id: int = Field(gt=0)
    # Fecha ISO y hora H:MM / HH:MM / HH:MM:SS; se normalizan en el calculador de slots
    date: str
    time: str
    # Número o texto: el calculador de slots decide (default 30 o InvalidDuration)
    duration_minutes: int | float | str | None = None
    reason: str = Field(min_length=1, max_length=255)
    type: str | None = Field(default=None, max_length=50)
    notes: str | None = None

class AppointmentUpdate(BaseModel):
    pet_id: int | None = Field(default=None, gt=0)
    vet_id: int | None = Field(default=None, gt=0)
    date: str | None = None
    time: str | None = None
    # Vacío o no numérico conserva la duración actual
    duration_minutes: int | float | str | None = None
    reason: str | None = Field(default=None, max_length=255)
    type: str | None = Field(default=None, max_length=50)
    notes: str | None = None

class AppointmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    pet_id: int
    vet_id: int
    date: date
    time: str
    end_time: str
    duration_minutes: int
    start_at: datetime
    end_at: datetime
    reason: str
    type: str | None = None
    notes: str | None = None
    status: AppointmentStatus
    is_active: bool

class CancelResponse(BaseModel):
    ok: bool = True
    appointment_id: int
    status: AppointmentStatus

class SlotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start: str
    end: str
    available: bool

class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    vet_id: int
    date: str
    duration_minutes: int
    step_minutes: int
    opening_time: str
    closing_time: str
    slots: list[SlotOut]
    appointments: list[AppointmentOut]
