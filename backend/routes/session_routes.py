import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.auth.passwords import verify_password
from backend.auth.session_tokens import create_session
from backend.core.errors import NotFound, ValidationError
from backend.dependencies import get_alumno_store, get_session_store
from backend.routes.alumno_routes import ALUMNO_NOT_FOUND
from backend.routes.validators import require_string
from backend.stores.entity_store import EntityStore
from backend.stores.session_store import SessionStore

router = APIRouter(tags=['sesiones'])

logger = logging.getLogger(__name__)

SESSION_NOT_FOUND = 'Sesión no encontrada o inactiva'


class LoginRequest(BaseModel):
    password: str

    @field_validator('password', mode='before')
    @classmethod
    def validate_password(cls, value):
        return require_string(value, 'La contraseña debe ser de tipo string')


class SessionStringRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_string: str = Field(alias='sessionString')

    @field_validator('session_string', mode='before')
    @classmethod
    def validate_session_string(cls, value):
        return require_string(value, 'El sessionString debe ser de tipo string')


class SesionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    fecha: int
    alumno_id: int = Field(alias='alumnoId')
    active: bool
    session_string: str = Field(alias='sessionString')


class TokenResponse(BaseModel):
    token: str


class SesionEnvelope(BaseModel):
    session: SesionResponse


@router.post('/{alumno_id}/session/login', response_model=TokenResponse)
def login(
    alumno_id: int,
    data: LoginRequest,
    alumnos: EntityStore = Depends(get_alumno_store),
    sesiones: SessionStore = Depends(get_session_store),
):
    alumno = alumnos.get(alumno_id)
    if alumno is None:
        raise NotFound(ALUMNO_NOT_FOUND)

    if not alumno.password_hash:
        raise ValidationError('El alumno no tiene contraseña configurada')
    if not verify_password(data.password, alumno.password_hash):
        raise ValidationError('Contraseña incorrecta')

    sesion = sesiones.add(create_session(alumno_id))
    logger.info('Opened session %s for alumno %s', sesion.id, alumno_id)
    return TokenResponse(token=sesion.session_string)


@router.post('/{alumno_id}/session/verify', response_model=SesionEnvelope)
def verify_session(
    alumno_id: int,
    data: SessionStringRequest,
    sesiones: SessionStore = Depends(get_session_store),
):
    del alumno_id
    sesion = sesiones.find_by_token(data.session_string, active_only=True)
    if sesion is None:
        raise ValidationError(SESSION_NOT_FOUND)

    return SesionEnvelope(session=SesionResponse.model_validate(sesion))


@router.post('/{alumno_id}/session/logout')
def logout(
    alumno_id: int,
    data: SessionStringRequest,
    sesiones: SessionStore = Depends(get_session_store),
):
    del alumno_id
    sesion = sesiones.find_by_token(data.session_string)
    if sesion is None:
        raise ValidationError('Sesión no encontrada')

    sesiones.deactivate(sesion)
    logger.info('Closed session %s', sesion.id)
    return {'message': 'Sesión cerrada correctamente'}
