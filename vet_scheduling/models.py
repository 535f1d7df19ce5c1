from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import event, Integer, String, Date, DateTime, Enum, Boolean, Text, CheckConstraint, Index
from datetime import date as date_type, datetime
import enum
from .database import Base
from .services.slots import compute_slot

class AppointmentStatus(str, enum.Enum):
    programada = "programada"
    confirmada = "confirmada"
    completada = "completada"
    cancelada = "cancelada"
    no_asistio = "no_asistio"

# Sólo estas citas ocupan agenda (canceladas / no asistió nunca bloquean)
BLOCKING_STATUSES = frozenset({AppointmentStatus.programada, AppointmentStatus.completada})

class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint("duration_minutes >= 5 AND duration_minutes <= 480", name="ck_appointments_duration"),
        Index("ix_appointments_vet_window", "vet_id", "start_at", "end_at"),
        Index("ix_appointments_pet_window", "pet_id", "start_at", "end_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Referencias opacas: mascotas y veterinarios viven fuera de este servicio
    pet_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    vet_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(8), nullable=False)        # HH:MM:SS
    end_time: Mapped[str] = mapped_column(String(8), nullable=False)    # HH:MM:00
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    # Naive, hora local del consultorio (sin conversión de zona)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, default=None)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    status: Mapped[AppointmentStatus] = mapped_column(Enum(AppointmentStatus, name="appointment_status"), default=AppointmentStatus.programada, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ====== Campos derivados ======
def sync_time_fields(target: Appointment) -> None:
    """
    Recalcula time/end_time/start_at/end_at/duration_minutes a partir de
    (date, time, duration_minutes), para que las filas nunca queden
    desalineadas aunque alguien escriba el modelo sin pasar por la agenda.
    """
    if not target.date or not target.time:
        return
    slot = compute_slot(target.date, target.time, target.duration_minutes)
    target.date = slot.start_at.date()
    target.time = slot.normalized_time
    target.duration_minutes = slot.duration
    target.end_time = slot.end_time
    target.start_at = slot.start_at
    target.end_at = slot.end_at


@event.listens_for(Appointment, "before_insert")
def _before_insert(mapper, connection, target):
    sync_time_fields(target)


@event.listens_for(Appointment, "before_update")
def _before_update(mapper, connection, target):
    sync_time_fields(target)
