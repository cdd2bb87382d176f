"""
Módulo de database: conexões com PostgreSQL (Supabase) e Redis
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

engine_kwargs = {
    "pool_pre_ping": True,
    "echo": settings.DEBUG,
}

# SQLite (desenvolvimento/testes) não aceita pool_size nem compartilha conexão entre threads
if settings.DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs["pool_size"] = 5
    engine_kwargs["max_overflow"] = 10

# Criar engine do SQLAlchemy usando DATABASE_URL do .env
engine = create_engine(settings.DATABASE_URL, **engine_kwargs)

# Criar SessionLocal
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base para os models
Base = declarative_base()


# Dependency para obter a sessão do banco
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

__all__ = ['get_db', 'Base', 'SessionLocal', 'engine']
