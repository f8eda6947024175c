import secrets
import time
import uuid

from backend.core import config
from backend.models.sesion import Sesion


def create_session(alumno_id: int) -> Sesion:
    """Build an active session whose token is independent from its row id."""
    return Sesion(
        id=str(uuid.uuid4()),
        fecha=int(time.time()),
        alumno_id=alumno_id,
        active=True,
        session_string=secrets.token_hex(config.SESSION_TOKEN_BYTES),
    )
