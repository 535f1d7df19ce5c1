# vet_scheduling/scripts/show_availability.py
# Uso: python -m vet_scheduling.scripts.show_availability <vet_id> [duracion_min]
import sys
from datetime import date, timedelta

from vet_scheduling.config import settings
from vet_scheduling.database import SessionLocal
from vet_scheduling.errors import SchedulingError
from vet_scheduling.services.availability import get_availability
from vet_scheduling.services.repository import SqlAppointmentLookup

def show_slots(db, vet_id: int, d: date, duration_minutes=None):
    print(f"\n=== Slots vet={vet_id} para {d.strftime('%Y-%m-%d')} "
          f"| {settings.CLINIC_OPENING_TIME}-{settings.CLINIC_CLOSING_TIME} ===")
    try:
        grid = get_availability(
            SqlAppointmentLookup(db),
            vet_id=vet_id,
            day=d,
            duration_minutes=duration_minutes,
            opening_time=settings.CLINIC_OPENING_TIME,
            closing_time=settings.CLINIC_CLOSING_TIME,
        )
    except SchedulingError as e:
        print("ERROR al generar la grilla:", e.message)
        return
    if not grid.slots:
        print("No hay slots en el horario configurado.")
        return
    for s in grid.slots:
        print(f" - {s.start}-{s.end} {'libre' if s.available else 'ocupado'}")

if __name__ == "__main__":
    vet = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    duration = sys.argv[2] if len(sys.argv) > 2 else None
    hoy = date.today()
    db = SessionLocal()
    try:
        show_slots(db, vet, hoy, duration)
        show_slots(db, vet, hoy + timedelta(days=1), duration)     # mañana
        show_slots(db, vet, hoy + timedelta(days=2), duration)     # pasado mañana
    finally:
        db.close()
