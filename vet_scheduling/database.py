# vet_scheduling/database.py
from __future__ import annotations
from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings

Base = declarative_base()

def engine_options(url: str) -> Dict[str, Any]:
    """
    Opciones de create_engine según el backend.
    SQLite (dev/tests) no usa pool con tamaño; Postgres toma el pool de settings.
    """
    opts: Dict[str, Any] = {"pool_pre_ping": True, "future": True}
    if url.startswith("sqlite"):
        # La sesión cruza hilos del threadpool de FastAPI
        opts["connect_args"] = {"check_same_thread": False}
        return opts
    opts.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )
    return opts

def make_engine(url: Optional[str] = None) -> Engine:
    url = url or settings.DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL no está configurada (revisa tu .env).")
    return create_engine(url, **engine_options(url))

engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)

def init_db(bind: Optional[Engine] = None) -> None:
    """Crea las tablas de la agenda (appointments + índices de ventana) si faltan."""
    from . import models  # noqa: F401  registra Appointment en Base.metadata
    Base.metadata.create_all(bind=bind or engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
