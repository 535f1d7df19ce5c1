from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vet_scheduling import models
from vet_scheduling.database import Base, get_db, init_db
from vet_scheduling.main import app
from vet_scheduling.services.slots import compute_slot

DAY = "2025-11-20"


@pytest.fixture
def db_session():
    # SQLite en memoria compartida entre hilos (TestClient corre los endpoints en un threadpool)
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def add_appointment(db_session):
    def _add(
        *,
        vet_id: int = 2,
        pet_id: int = 7,
        day: str = DAY,
        time: str = "10:00",
        duration: int = 30,
        status: models.AppointmentStatus = models.AppointmentStatus.programada,
        is_active: bool = True,
    ) -> models.Appointment:
        slot = compute_slot(day, time, duration)
        appt = models.Appointment(
            pet_id=pet_id,
            vet_id=vet_id,
            date=slot.start_at.date(),
            time=slot.normalized_time,
            end_time=slot.end_time,
            duration_minutes=slot.duration,
            start_at=slot.start_at,
            end_at=slot.end_at,
            reason="Control anual",
            status=status,
            is_active=is_active,
        )
        db_session.add(appt)
        db_session.commit()
        db_session.refresh(appt)
        return appt

    return _add


@pytest.fixture
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
