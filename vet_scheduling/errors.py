# vet_scheduling/errors.py
from __future__ import annotations
from typing import Optional


class SchedulingError(Exception):
    """
    Error base de la agenda. Cada subclase trae el status HTTP con el que
    el handler de la app debe responder y un mensaje por defecto.
    """
    status_code: int = 400
    default_message: str = "Solicitud de agenda inválida."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ====== 400: validación ======
class InvalidDuration(SchedulingError):
    default_message = "La duracion debe estar entre 5 y 480 minutos."


class InvalidStep(SchedulingError):
    default_message = "El intervalo debe estar entre 5 y 240 minutos."


class InvalidDateTime(SchedulingError):
    default_message = "Fecha u hora invalidas."


class InvalidBusinessHours(SchedulingError):
    default_message = "La hora de cierre debe ser posterior a la de apertura."


class MissingParameter(SchedulingError):
    default_message = "Faltan parametros obligatorios."


# ====== 404 ======
class AppointmentNotFound(SchedulingError):
    status_code = 404
    default_message = "Cita no encontrada"


# ====== 409: choques de agenda ======
class SchedulingConflict(SchedulingError):
    status_code = 409
    default_message = "Horario no disponible"


class VeterinarianConflict(SchedulingConflict):
    default_message = "El veterinario ya tiene una cita en ese horario."


class PetConflict(SchedulingConflict):
    default_message = "La mascota ya tiene una cita en ese horario."
