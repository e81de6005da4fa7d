from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from src.real_estate_catalog.core.config import settings

# SQLite only allows the connection to be used by the thread that created it,
# but FastAPI runs the sync routes inside a threadpool
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


# --- Dependency that provides a database session per request ---
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
