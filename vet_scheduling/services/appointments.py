# vet_scheduling/services/appointments.py
from __future__ import annotations
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from .. import models, schemas
from ..errors import AppointmentNotFound, MissingParameter
from .conflicts import ensure_no_conflicts
from .repository import SqlAppointmentLookup
from .slots import Slot, coerce_minutes, compute_slot

logger = logging.getLogger(__name__)

# Espacios de nombres para pg_advisory_xact_lock(int, int)
_LOCK_NS_VET = 1
_LOCK_NS_PET = 2


# ====== Helpers ======
def _lock_parties(db: Session, vet_id: int, pet_id: int) -> None:
    """
    Serializa verificación + escritura por veterinario y por mascota.
    En Postgres toma advisory locks de transacción (se liberan en commit/rollback),
    siempre en el mismo orden vet → mascota. SQLite ya serializa escrituras.
    """
    if db.get_bind().dialect.name != "postgresql":
        return
    db.execute(text("SELECT pg_advisory_xact_lock(:ns, :key)"), {"ns": _LOCK_NS_VET, "key": vet_id})
    db.execute(text("SELECT pg_advisory_xact_lock(:ns, :key)"), {"ns": _LOCK_NS_PET, "key": pet_id})


def _apply_slot(appt: models.Appointment, slot: Slot) -> None:
    appt.date = slot.start_at.date()
    appt.time = slot.normalized_time
    appt.duration_minutes = slot.duration
    appt.end_time = slot.end_time
    appt.start_at = slot.start_at
    appt.end_at = slot.end_at


def _checked_commit(db: Session, vet_id: int, pet_id: int, slot: Slot,
                    appt: models.Appointment, exclude_id: Optional[int] = None) -> None:
    """Verifica choques y guarda en la misma transacción; cualquier fallo hace rollback."""
    try:
        _lock_parties(db, vet_id, pet_id)
        ensure_no_conflicts(
            SqlAppointmentLookup(db),
            vet_id=vet_id,
            pet_id=pet_id,
            start_at=slot.start_at,
            end_at=slot.end_at,
            exclude_id=exclude_id,
        )
        db.add(appt)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(appt)


# ====== Consultas ======
def get_appointment(db: Session, appointment_id: int) -> models.Appointment:
    appt = (
        db.query(models.Appointment)
        .filter(models.Appointment.id == appointment_id, models.Appointment.is_active.is_(True))
        .first()
    )
    if not appt:
        raise AppointmentNotFound()
    return appt


def list_appointments(
    db: Session,
    day: Optional[date] = None,
    status: Optional[models.AppointmentStatus] = None,
    vet_id: Optional[int] = None,
    pet_id: Optional[int] = None,
) -> List[models.Appointment]:
    q = db.query(models.Appointment).filter(models.Appointment.is_active.is_(True))
    if day is not None:
        q = q.filter(models.Appointment.date == day)
    if status is not None:
        q = q.filter(models.Appointment.status == status)
    if vet_id is not None:
        q = q.filter(models.Appointment.vet_id == vet_id)
    if pet_id is not None:
        q = q.filter(models.Appointment.pet_id == pet_id)
    return q.order_by(models.Appointment.date, models.Appointment.time, models.Appointment.id).all()


# ====== Operaciones ======
def book_appointment(db: Session, data: schemas.AppointmentCreate) -> models.Appointment:
    if not data.pet_id or not data.vet_id or not data.date or not data.time or not data.reason:
        raise MissingParameter("Faltan campos obligatorios")

    slot = compute_slot(data.date, data.time, data.duration_minutes)
    appt = models.Appointment(
        pet_id=data.pet_id,
        vet_id=data.vet_id,
        reason=data.reason,
        type=data.type,
        notes=data.notes,
        status=models.AppointmentStatus.programada,
        is_active=True,
    )
    _apply_slot(appt, slot)
    _checked_commit(db, data.vet_id, data.pet_id, slot, appt)

    logger.info("Cita creada: id=%s vet=%s pet=%s start=%s end=%s",
                appt.id, appt.vet_id, appt.pet_id, appt.start_at.isoformat(), appt.end_at.isoformat())
    return appt


def reschedule_appointment(db: Session, appointment_id: int,
                           changes: schemas.AppointmentUpdate) -> models.Appointment:
    """
    Reprograma / edita una cita activa. Lo que no viene en `changes`
    conserva el valor actual; la cita se excluye de su propia verificación.
    """
    appt = get_appointment(db, appointment_id)

    pet_id = changes.pet_id or appt.pet_id
    vet_id = changes.vet_id or appt.vet_id
    day = changes.date or appt.date
    time = changes.time or appt.time
    # Vacío o no numérico conserva la duración actual
    duration = changes.duration_minutes if coerce_minutes(changes.duration_minutes) else appt.duration_minutes
    reason = changes.reason or appt.reason

    if not pet_id or not vet_id or not day or not time or not reason:
        raise MissingParameter("Faltan campos obligatorios")

    slot = compute_slot(day, time, duration)

    appt.pet_id = pet_id
    appt.vet_id = vet_id
    appt.reason = reason
    if changes.type is not None:
        appt.type = changes.type
    if changes.notes is not None:
        appt.notes = changes.notes
    _apply_slot(appt, slot)
    _checked_commit(db, vet_id, pet_id, slot, appt, exclude_id=appt.id)

    logger.info("Cita reprogramada: id=%s vet=%s pet=%s start=%s",
                appt.id, appt.vet_id, appt.pet_id, appt.start_at.isoformat())
    return appt


def cancel_appointment(db: Session, appointment_id: int) -> models.Appointment:
    appt = get_appointment(db, appointment_id)
    appt.is_active = False
    appt.status = models.AppointmentStatus.cancelada
    db.commit()
    db.refresh(appt)
    logger.info("Cita cancelada: id=%s", appt.id)
    return appt
