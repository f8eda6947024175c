from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


connect_args = {}
if config.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(config.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_alumno_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_alumno_schema(bind: Engine | None = None) -> None:
    """Add the photo and password columns to an ``alumnos`` table created before they existed."""
    global _alumno_schema_checked

    if _alumno_schema_checked:
        return

    with _schema_lock:
        if _alumno_schema_checked:
            return

        bind = bind or engine
        inspector = inspect(bind)

        if 'alumnos' not in inspector.get_table_names():
            _alumno_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('alumnos')}
        migration_steps = [
            ('foto_perfil_url', 'ALTER TABLE alumnos ADD COLUMN foto_perfil_url VARCHAR(512)'),
            ('password_hash', 'ALTER TABLE alumnos ADD COLUMN password_hash VARCHAR(255)'),
        ]

        with bind.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))

        _alumno_schema_checked = True
