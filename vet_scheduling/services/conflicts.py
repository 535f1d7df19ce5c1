# vet_scheduling/services/conflicts.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from .. import models
from ..errors import PetConflict, VeterinarianConflict
from .repository import AppointmentLookup, BlockingQuery
from .slots import overlaps


def _first_overlap(lookup: AppointmentLookup, query: BlockingQuery) -> Optional[models.Appointment]:
    for appt in lookup.find_blocking(query):
        if overlaps(query.start_at, query.end_at, appt.start_at, appt.end_at):
            return appt
    return None


def ensure_no_conflicts(
    lookup: AppointmentLookup,
    vet_id: Optional[int],
    pet_id: Optional[int],
    start_at: datetime,
    end_at: datetime,
    exclude_id: Optional[int] = None,
) -> None:
    """
    Falla si el veterinario o la mascota ya tienen una cita que bloquea y
    se solapa con [start_at, end_at).

    - Sin vet_id o sin pet_id no se valida nada.
    - exclude_id deja fuera la propia cita al reprogramar.
    - Se consulta primero al veterinario: si ambos chocan, gana VeterinarianConflict.
    """
    if not vet_id or not pet_id:
        return

    vet_overlap = _first_overlap(lookup, BlockingQuery(
        vet_id=vet_id, exclude_id=exclude_id, start_at=start_at, end_at=end_at,
    ))
    if vet_overlap is not None:
        raise VeterinarianConflict()

    pet_overlap = _first_overlap(lookup, BlockingQuery(
        pet_id=pet_id, exclude_id=exclude_id, start_at=start_at, end_at=end_at,
    ))
    if pet_overlap is not None:
        raise PetConflict()
