from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    # Database (Supabase Postgres)
    DATABASE_URL: str

    # Security
    ENVIRONMENT: str = "development"
    DEV_MODE: bool = True  # Modo desenvolvimento (permite token "test")
    DEV_ADMIN_ID: str = "00000000-0000-0000-0000-000000000001"

    # API
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Supabase Auth
    SUPABASE_URL: str = ""
    SUPABASE_JWKS_URL: str = ""  # endpoint para pegar chaves públicas (/.well-known/jwks.json)
    SUPABASE_AUDIENCE: str = "authenticated"  # Audience esperado no JWT
    SUPABASE_JWT_TIMEOUT: int = 10

    # Redis (para Celery e rate limiting)
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_PREFIX: str = "incentivo:"  # Prefixo para chaves Redis de rate limiting

    # Rate Limiting
    RATE_LIMIT_PER_IP: str = "120/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    BULK_APPROVE_LIMIT_PER_MINUTE: int = 20
    IMPORT_LIMIT_PER_MINUTE: int = 5

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    STATS_REFRESH_HOUR: int = 3  # Hora do recálculo noturno de agregados

    # Listagens e dashboard
    VENDORS_PAGE_SIZE: int = 10
    DASHBOARD_REGION_DAYS: int = 30
    DASHBOARD_PENDING_LIMIT: int = 5
    IMPORT_MAX_ROWS: int = 1000
    TIMEZONE: str = "America/Sao_Paulo"

    # Opcional: URL pública do bucket de imagens das notas
    RECEIPT_IMAGES_BASE_URL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
