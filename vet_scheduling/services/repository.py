# vet_scheduling/services/repository.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Protocol

from sqlalchemy.orm import Session

from .. import models


@dataclass(frozen=True)
class BlockingQuery:
    """
    Filtros opcionales para buscar citas que ocupan agenda.
    Todos los presentes se combinan con AND; siempre se exige
    is_active=True y status en BLOCKING_STATUSES.
    """
    vet_id: Optional[int] = None
    pet_id: Optional[int] = None
    exclude_id: Optional[int] = None
    on_date: Optional[date] = None
    # Ventana [start_at, end_at): sólo citas que la solapan
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None


class AppointmentLookup(Protocol):
    def find_blocking(self, query: BlockingQuery) -> List[models.Appointment]:
        ...


class SqlAppointmentLookup:
    """Implementación con SQLAlchemy sobre la sesión de la request."""

    def __init__(self, db: Session):
        self.db = db

    def find_blocking(self, query: BlockingQuery) -> List[models.Appointment]:
        q = (
            self.db.query(models.Appointment)
            .filter(models.Appointment.is_active.is_(True))
            .filter(models.Appointment.status.in_(list(models.BLOCKING_STATUSES)))
        )
        if query.vet_id is not None:
            q = q.filter(models.Appointment.vet_id == query.vet_id)
        if query.pet_id is not None:
            q = q.filter(models.Appointment.pet_id == query.pet_id)
        if query.exclude_id is not None:
            q = q.filter(models.Appointment.id != query.exclude_id)
        if query.on_date is not None:
            q = q.filter(models.Appointment.date == query.on_date)
        # Misma condición que overlaps(): start < fin_ventana AND end > inicio_ventana
        if query.end_at is not None:
            q = q.filter(models.Appointment.start_at < query.end_at)
        if query.start_at is not None:
            q = q.filter(models.Appointment.end_at > query.start_at)
        return q.order_by(models.Appointment.start_at, models.Appointment.id).all()
