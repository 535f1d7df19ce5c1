# vet_scheduling/services/slots.py
from __future__ import annotations
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

from ..errors import InvalidDateTime, InvalidDuration

DEFAULT_DURATION_MIN = 30
MIN_DURATION_MIN = 5
MAX_DURATION_MIN = 480

_CANONICAL_TIME = re.compile(r"\d{2}:\d{2}:\d{2}")


@dataclass(frozen=True)
class Slot:
    duration: int
    normalized_time: str
    start_at: datetime
    end_at: datetime
    end_time: str


# ====== Utilidades de tiempo ======
def normalize_time(value: Any) -> Any:
    """
    Rellena con ceros hora/minuto/segundo → 'HH:MM:SS'.
    '9:5' → '09:05:00', '9:05:7' → '09:05:07'. Otras formas se devuelven tal cual.
    """
    if not value:
        return value
    parts = str(value).split(":")
    if len(parts) == 2:
        h, m = parts
        return f"{h.zfill(2)}:{m.zfill(2)}:00"
    if len(parts) == 3:
        h, m, s = parts
        return f"{h.zfill(2)}:{m.zfill(2)}:{(s or '00').zfill(2)}"
    return value


def to_datetime(day: Union[str, date], value: Any) -> datetime:
    """Combina fecha ISO + hora en un datetime naive (hora local del consultorio)."""
    if not day or not value:
        raise InvalidDateTime()
    normalized = normalize_time(value)
    # Sólo HH:MM:SS naive; nada de fracciones, zonas u horas compactas tipo "1000"
    if not isinstance(normalized, str) or not _CANONICAL_TIME.fullmatch(normalized):
        raise InvalidDateTime()
    try:
        return datetime.strptime(f"{day} {normalized}", "%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError):
        raise InvalidDateTime()


def format_time(dt: datetime) -> str:
    return dt.strftime("%H:%M")


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    # Intervalos semiabiertos: tocar el borde no es choque
    return a_start < b_end and a_end > b_start


def coerce_minutes(value: Any) -> Optional[float]:
    """Número de minutos o None si viene vacío / no numérico."""
    if value is None or isinstance(value, bool):
        return None
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return None
    return minutes if math.isfinite(minutes) else None


def _resolve_duration(value: Any) -> int:
    minutes = coerce_minutes(value) or DEFAULT_DURATION_MIN
    if not float(minutes).is_integer():
        raise InvalidDuration()
    minutes = int(minutes)
    if minutes < MIN_DURATION_MIN or minutes > MAX_DURATION_MIN:
        raise InvalidDuration()
    return minutes


# ====== Slot ======
def compute_slot(day: Union[str, date], time: Any, duration_minutes: Any = None) -> Slot:
    """
    Convierte (fecha, hora, duración) en un intervalo canónico.
    No valida horario de consultorio; eso es cosa de la grilla de disponibilidad.
    """
    duration = _resolve_duration(duration_minutes)
    normalized = normalize_time(time)
    start_at = to_datetime(day, normalized)
    end_at = start_at + timedelta(minutes=duration)
    return Slot(
        duration=duration,
        normalized_time=normalized,
        start_at=start_at,
        end_at=end_at,
        end_time=end_at.strftime("%H:%M:00"),
    )
