from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core import config
from backend.core.errors import IntegrationError
from backend.database import ensure_alumno_schema, get_db
from backend.models.alumno import Alumno
from backend.models.profesor import Profesor
from backend.services.notifications import Notifier
from backend.services.storage import PhotoStorage
from backend.stores.entity_store import EntityStore, MemoryEntityStore, SqlEntityStore
from backend.stores.session_store import MemorySessionStore, SessionStore, SqlSessionStore


class MemoryStores:
    """Transient collections owned by one application instance."""

    def __init__(self):
        self.alumnos = MemoryEntityStore(Alumno, unique_field='matricula')
        self.profesores = MemoryEntityStore(Profesor, unique_field='numero_empleado')
        self.sesiones = MemorySessionStore()


def ensure_database_ready() -> None:
    try:
        ensure_alumno_schema()
    except SQLAlchemyError as exc:
        raise IntegrationError(
            'Database unavailable. Verify DATABASE_URL and database credentials.'
        ) from exc


def _memory_stores(request: Request) -> MemoryStores | None:
    if config.STORE_BACKEND != 'memory':
        return None
    return request.app.state.memory_stores


def get_alumno_store(request: Request, db: Session = Depends(get_db)) -> EntityStore:
    stores = _memory_stores(request)
    if stores is not None:
        return stores.alumnos
    ensure_database_ready()
    return SqlEntityStore(db, Alumno)


def get_profesor_store(request: Request, db: Session = Depends(get_db)) -> EntityStore:
    stores = _memory_stores(request)
    if stores is not None:
        return stores.profesores
    ensure_database_ready()
    return SqlEntityStore(db, Profesor)


def get_session_store(request: Request, db: Session = Depends(get_db)) -> SessionStore:
    stores = _memory_stores(request)
    if stores is not None:
        return stores.sesiones
    ensure_database_ready()
    return SqlSessionStore(db)


@lru_cache
def get_photo_storage() -> PhotoStorage:
    return PhotoStorage(config.S3_BUCKET_NAME)


@lru_cache
def get_notifier() -> Notifier:
    return Notifier(config.SNS_TOPIC_ARN)
