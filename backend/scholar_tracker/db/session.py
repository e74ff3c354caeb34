from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from scholar_tracker.config import DATABASE_URL, SQL_ECHO

if not DATABASE_URL:
    raise RuntimeError(
        "Database configuration missing. Set DATABASE_URL, or POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_DB, POSTGRES_HOST, POSTGRES_PORT in .env"
    )

# Pool sizing only applies to server databases; SQLite is used for local runs and tests
if DATABASE_URL.startswith("sqlite"):
    _engine_options = {"connect_args": {"check_same_thread": False}}
else:
    _engine_options = {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, **_engine_options)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
