# vet_scheduling/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ===== App =====
    APP_NAME: str = "vet_scheduling"
    ENV: str = "dev"

    # ===== Logging =====
    LOG_LEVEL: str = "INFO"
    SQLA_LOG_LEVEL: str = "WARNING"

    # ===== DB =====
    # En producción define DATABASE_URL con tu Postgres. Local puede caer a SQLite.
    DATABASE_URL: str = "sqlite:///./vet_scheduling.db"

    # Opciones de pool (sólo aplican fuera de SQLite)
    DB_POOL_SIZE: int = 2
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 min

    # ===== Horario de consultorio y slots =====
    # Hora local del consultorio; no se hace conversión de zona horaria
    CLINIC_OPENING_TIME: str = "09:00"
    CLINIC_CLOSING_TIME: str = "18:00"


settings = Settings()
