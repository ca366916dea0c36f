# pdf_gallery/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import settings
from .utils.logging import db_logger

SQLALCHEMY_DATABASE_URL = str(settings.DATABASE_URL)
db_logger.info("Connecting to database", extra={"database_url": SQLALCHEMY_DATABASE_URL})


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def install_sqlite_functions(engine):
    """Replace SQLite's ASCII-only lower() so ilike folds case like str.lower()"""
    @event.listens_for(engine, "connect")
    def register_functions(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    return engine


engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {},
    echo=False  # This will log all SQL statements
)
if engine.dialect.name == "sqlite":
    install_sqlite_functions(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
