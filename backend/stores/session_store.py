import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import IntegrationError
from backend.models.sesion import Sesion

logger = logging.getLogger(__name__)


class SessionStore:
    def add(self, sesion: Sesion) -> Sesion:
        raise NotImplementedError

    def find_by_token(self, session_string: str, active_only: bool = False) -> Sesion | None:
        raise NotImplementedError

    def deactivate(self, sesion: Sesion) -> Sesion:
        raise NotImplementedError


class SqlSessionStore(SessionStore):
    def __init__(self, db: Session):
        self.db = db

    def add(self, sesion: Sesion) -> Sesion:
        self.db.add(sesion)
        self._commit()
        self.db.refresh(sesion)
        return sesion

    def find_by_token(self, session_string: str, active_only: bool = False) -> Sesion | None:
        try:
            query = self.db.query(Sesion).filter(Sesion.session_string == session_string)
            if active_only:
                query = query.filter(Sesion.active.is_(True))
            return query.first()
        except SQLAlchemyError as exc:
            raise IntegrationError(str(exc)) from exc

    def deactivate(self, sesion: Sesion) -> Sesion:
        sesion.active = False
        self._commit()
        self.db.refresh(sesion)
        return sesion

    def _commit(self) -> None:
        # A token collision is a server fault here, never a client error.
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Session table write failed')
            raise IntegrationError(str(exc)) from exc


class MemorySessionStore(SessionStore):
    def __init__(self):
        self._by_token: dict[str, Sesion] = {}

    def add(self, sesion: Sesion) -> Sesion:
        if sesion.session_string in self._by_token:
            raise IntegrationError('UNIQUE constraint failed: sesiones.session_string')
        self._by_token[sesion.session_string] = sesion
        return sesion

    def find_by_token(self, session_string: str, active_only: bool = False) -> Sesion | None:
        sesion = self._by_token.get(session_string)
        if sesion is None or (active_only and not sesion.active):
            return None
        return sesion

    def deactivate(self, sesion: Sesion) -> Sesion:
        sesion.active = False
        return sesion
