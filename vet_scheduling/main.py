# vet_scheduling/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .database import init_db
from .errors import SchedulingError

# Routers
from .routers.appointments import router as appointments_router
from .routers.availability import router as availability_router

# ──────────────────────────────────────────────────────────────────────────────
# LOGGING
# Controla niveles con variables de entorno: LOG_LEVEL, SQLA_LOG_LEVEL
# ──────────────────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Ruido de SQLAlchemy
logging.getLogger("sqlalchemy.engine").setLevel(
    getattr(logging, settings.SQLA_LOG_LEVEL.upper(), logging.WARNING)
)

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# FastAPI App
# ──────────────────────────────────────────────────────────────────────────────
app = FastAPI(title=settings.APP_NAME)

# Monta rutas
app.include_router(appointments_router)
app.include_router(availability_router)

# ──────────────────────────────────────────────────────────────────────────────
# Errores de agenda → HTTP
# 400 validación, 404 cita inexistente, 409 choque de horario
# ──────────────────────────────────────────────────────────────────────────────
@app.exception_handler(SchedulingError)
def scheduling_error_handler(request: Request, exc: SchedulingError):
    logger.warning("%s %s → %s %s: %s", request.method, request.url.path,
                   exc.status_code, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

# ──────────────────────────────────────────────────────────────────────────────
# Ciclo de vida
# ──────────────────────────────────────────────────────────────────────────────
@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Startup completo: %s (%s)", settings.APP_NAME, settings.ENV)

@app.get("/")
def root():
    return {"ok": True, "app": settings.APP_NAME, "env": settings.ENV}
