# vet_scheduling/services/availability.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, List, Optional, Union

from .. import models
from ..errors import InvalidBusinessHours, InvalidDuration, InvalidStep, MissingParameter
from .repository import AppointmentLookup, BlockingQuery
from .slots import (
    DEFAULT_DURATION_MIN,
    MAX_DURATION_MIN,
    MIN_DURATION_MIN,
    coerce_minutes,
    format_time,
    overlaps,
    to_datetime,
)

MIN_STEP_MIN = 5
MAX_STEP_MIN = 240


@dataclass(frozen=True)
class GridSlot:
    start: str      # HH:MM
    end: str        # HH:MM
    available: bool


@dataclass
class Availability:
    vet_id: int
    date: str
    duration_minutes: int
    step_minutes: int
    opening_time: str
    closing_time: str
    slots: List[GridSlot] = field(default_factory=list)
    appointments: List[models.Appointment] = field(default_factory=list)


def _positive_or(value: Any, default: float) -> float:
    minutes = coerce_minutes(value)
    return minutes if minutes is not None and minutes > 0 else default


def _bounded_minutes(value: float, low: int, high: int, error: type) -> int:
    if not float(value).is_integer() or value < low or value > high:
        raise error()
    return int(value)


# ====== Grilla de disponibilidad ======
def get_availability(
    lookup: AppointmentLookup,
    vet_id: Optional[int],
    day: Union[str, date, None],
    duration_minutes: Any = None,
    opening_time: str = "09:00",
    closing_time: str = "18:00",
    step_minutes: Any = None,
) -> Availability:
    """
    Genera los slots de un día para un veterinario entre apertura y cierre,
    marcando como no disponibles los que se solapan con citas que bloquean.

    Las citas del día se consultan una sola vez; luego es un barrido
    slots × citas (ambos acotados por un día y el paso mínimo de 5 min).
    Ningún slot termina después del cierre.
    """
    if not vet_id or not day:
        raise MissingParameter("vetId y date son obligatorios.")

    duration = _bounded_minutes(
        _positive_or(duration_minutes, DEFAULT_DURATION_MIN),
        MIN_DURATION_MIN, MAX_DURATION_MIN, InvalidDuration,
    )
    step = _bounded_minutes(
        _positive_or(step_minutes, duration),
        MIN_STEP_MIN, MAX_STEP_MIN, InvalidStep,
    )

    opening_at = to_datetime(day, opening_time)
    closing_at = to_datetime(day, closing_time)
    if closing_at <= opening_at:
        raise InvalidBusinessHours()

    appointments = lookup.find_blocking(BlockingQuery(vet_id=vet_id, on_date=opening_at.date()))

    slots: List[GridSlot] = []
    delta = timedelta(minutes=duration)
    cur = opening_at
    while cur + delta <= closing_at:
        slot_start = cur
        slot_end = cur + delta
        busy = any(overlaps(slot_start, slot_end, ap.start_at, ap.end_at) for ap in appointments)
        slots.append(GridSlot(start=format_time(slot_start), end=format_time(slot_end), available=not busy))
        cur += timedelta(minutes=step)

    return Availability(
        vet_id=vet_id,
        date=opening_at.date().isoformat(),
        duration_minutes=duration,
        step_minutes=step,
        opening_time=opening_time,
        closing_time=closing_time,
        slots=slots,
        appointments=appointments,
    )
