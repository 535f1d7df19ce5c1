from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..config import settings
from ..database import get_db
from .. import schemas
from ..services.availability import get_availability
from ..services.repository import SqlAppointmentLookup

router = APIRouter(prefix="", tags=["availability"])

@router.get("/availability", response_model=schemas.AvailabilityResponse)
def availability(
    vet_id: Optional[int] = Query(None, alias="vetId"),
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    # Texto libre: valores no numéricos o <= 0 caen al default del generador
    duration_minutes: Optional[str] = Query(None, alias="durationMinutes"),
    opening_time: Optional[str] = Query(None, alias="openingTime"),
    closing_time: Optional[str] = Query(None, alias="closingTime"),
    step_minutes: Optional[str] = Query(None, alias="stepMinutes"),
    db: Session = Depends(get_db),
):
    result = get_availability(
        SqlAppointmentLookup(db),
        vet_id=vet_id,
        day=date,
        duration_minutes=duration_minutes,
        opening_time=opening_time or settings.CLINIC_OPENING_TIME,
        closing_time=closing_time or settings.CLINIC_CLOSING_TIME,
        step_minutes=step_minutes,
    )
    return schemas.AvailabilityResponse.model_validate(result)
