from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from dateutil import parser as dtparser

from ..database import get_db
from .. import models, schemas
from ..services import appointments as appointment_service

router = APIRouter(prefix="/appointments", tags=["appointments"])

@router.get("", response_model=list[schemas.AppointmentOut])
def list_appointments(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    status: Optional[models.AppointmentStatus] = None,
    vet_id: Optional[int] = None,
    pet_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    day = None
    if date:
        try:
            day = dtparser.parse(date).date()
        except (ValueError, OverflowError):
            raise HTTPException(status_code=400, detail="Formato de fecha inválido. Usa YYYY-MM-DD.")
    return appointment_service.list_appointments(db, day=day, status=status, vet_id=vet_id, pet_id=pet_id)

@router.get("/{appointment_id}", response_model=schemas.AppointmentOut)
def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    return appointment_service.get_appointment(db, appointment_id)

@router.post("", response_model=schemas.AppointmentOut, status_code=201)
def create_appointment(req: schemas.AppointmentCreate, db: Session = Depends(get_db)):
    return appointment_service.book_appointment(db, req)

@router.put("/{appointment_id}", response_model=schemas.AppointmentOut)
def update_appointment(appointment_id: int, req: schemas.AppointmentUpdate, db: Session = Depends(get_db)):
    return appointment_service.reschedule_appointment(db, appointment_id, req)

@router.post("/{appointment_id}/cancel", response_model=schemas.CancelResponse)
def cancel_appointment(appointment_id: int, db: Session = Depends(get_db)):
    appt = appointment_service.cancel_appointment(db, appointment_id)
    return schemas.CancelResponse(appointment_id=appt.id, status=appt.status)
