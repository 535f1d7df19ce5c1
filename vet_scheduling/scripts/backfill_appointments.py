# vet_scheduling/scripts/backfill_appointments.py
# Uso: python -m vet_scheduling.scripts.backfill_appointments
# Re-sincroniza hora normalizada, fin y duración de citas viejas.
import sys

from vet_scheduling.database import SessionLocal
from vet_scheduling.errors import SchedulingError
from vet_scheduling.models import Appointment
from vet_scheduling.services.slots import compute_slot

def _stale_fields(appt: Appointment) -> dict:
    if not appt.date or not appt.time:
        return {}
    slot = compute_slot(appt.date, appt.time, appt.duration_minutes)
    expected = {
        "time": slot.normalized_time,
        "duration_minutes": slot.duration,
        "end_time": slot.end_time,
        "start_at": slot.start_at,
        "end_at": slot.end_at,
    }
    return {k: v for k, v in expected.items() if getattr(appt, k) != v}

def backfill(db) -> int:
    """Actualiza las citas desalineadas y devuelve cuántas se tocaron."""
    updated = 0
    for appt in db.query(Appointment).order_by(Appointment.id).all():
        try:
            changes = _stale_fields(appt)
        except SchedulingError as e:
            print(f"Cita {appt.id} omitida: {e.message}")
            continue
        if not changes:
            continue
        for k, v in changes.items():
            setattr(appt, k, v)
        updated += 1
    db.commit()
    return updated

if __name__ == "__main__":
    db = SessionLocal()
    try:
        n = backfill(db)
        print(f"Backfill completado. Registros actualizados: {n}")
    except Exception as e:
        db.rollback()
        print("Error durante el backfill:", e)
        sys.exit(1)
    finally:
        db.close()
