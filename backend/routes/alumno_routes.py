import logging
import time

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.auth.passwords import hash_password
from backend.core.errors import MethodNotSupported, NotFound, ValidationError
from backend.dependencies import get_alumno_store, get_notifier, get_photo_storage
from backend.routes.validators import require_non_negative_number, require_string
from backend.services.notifications import Notifier, build_student_message
from backend.services.storage import PhotoStorage
from backend.stores.entity_store import EntityStore

router = APIRouter(tags=['alumnos'])

logger = logging.getLogger(__name__)

ALUMNO_NOT_FOUND = 'Alumno no encontrado'


class AlumnoRequest(BaseModel):
    nombres: str
    apellidos: str
    matricula: str
    promedio: float
    password: str | None = None

    @field_validator('nombres', 'apellidos', mode='before')
    @classmethod
    def validate_names(cls, value, info):
        return require_string(value, f'{info.field_name} debe ser de tipo string')

    @field_validator('matricula', mode='before')
    @classmethod
    def validate_matricula(cls, value):
        return require_string(value, 'La matricula debe ser de tipo string')

    @field_validator('promedio', mode='before')
    @classmethod
    def validate_promedio(cls, value):
        return require_non_negative_number(
            value,
            'El promedio debe ser un valor numérico',
            'El promedio no puede ser negativo',
        )

    @field_validator('password', mode='before')
    @classmethod
    def validate_password(cls, value):
        if value is None or value == '':
            return None
        return require_string(value, 'La contraseña debe ser de tipo string')

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude={'password'})
        if self.password is not None:
            fields['password_hash'] = hash_password(self.password)
        return fields


class AlumnoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    nombres: str
    apellidos: str
    matricula: str
    promedio: float
    foto_perfil_url: str | None = Field(default=None, alias='fotoPerfilUrl')


class FotoPerfilResponse(BaseModel):
    url: str
    alumno: AlumnoResponse


def get_alumno_or_404(alumno_id: int, store: EntityStore):
    alumno = store.get(alumno_id)
    if alumno is None:
        raise NotFound(ALUMNO_NOT_FOUND)
    return alumno


@router.get('', response_model=list[AlumnoResponse])
def list_alumnos(store: EntityStore = Depends(get_alumno_store)):
    return store.list()


@router.post('', response_model=AlumnoResponse, status_code=status.HTTP_201_CREATED)
def create_alumno(data: AlumnoRequest, store: EntityStore = Depends(get_alumno_store)):
    alumno = store.create(data.to_fields())
    logger.info('Created alumno %s (%s)', alumno.id, alumno.matricula)
    return alumno


@router.delete('')
def delete_all_alumnos():
    raise MethodNotSupported('Método no soportado: no se pueden eliminar todos los alumnos')


@router.get('/{alumno_id}', response_model=AlumnoResponse)
def get_alumno(alumno_id: int, store: EntityStore = Depends(get_alumno_store)):
    return get_alumno_or_404(alumno_id, store)


@router.put('/{alumno_id}', response_model=AlumnoResponse)
def update_alumno(alumno_id: int, data: AlumnoRequest, store: EntityStore = Depends(get_alumno_store)):
    alumno = store.replace(alumno_id, data.to_fields())
    if alumno is None:
        raise NotFound(ALUMNO_NOT_FOUND)
    return alumno


@router.delete('/{alumno_id}')
def delete_alumno(alumno_id: int, store: EntityStore = Depends(get_alumno_store)):
    if not store.remove(alumno_id):
        raise NotFound(ALUMNO_NOT_FOUND)

    logger.info('Deleted alumno %s', alumno_id)
    return {'message': 'Alumno eliminado correctamente'}


@router.post('/{alumno_id}/fotoPerfil', response_model=FotoPerfilResponse)
def upload_foto_perfil(
    alumno_id: int,
    foto: UploadFile | None = File(default=None),
    store: EntityStore = Depends(get_alumno_store),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    get_alumno_or_404(alumno_id, store)

    if foto is None or not foto.filename:
        raise ValidationError('No se envió ningún archivo')

    key = f'{alumno_id}-{int(time.time() * 1000)}-{foto.filename}'
    url = storage.upload(key, foto.file.read(), content_type=foto.content_type)

    # The object is already stored; a failure here leaves it orphaned.
    alumno = store.replace(alumno_id, {'foto_perfil_url': url})
    if alumno is None:
        raise NotFound(ALUMNO_NOT_FOUND)

    return FotoPerfilResponse(url=url, alumno=AlumnoResponse.model_validate(alumno))


@router.post('/{alumno_id}/email')
def send_alumno_email(
    alumno_id: int,
    store: EntityStore = Depends(get_alumno_store),
    notifier: Notifier = Depends(get_notifier),
):
    alumno = get_alumno_or_404(alumno_id, store)

    subject, message = build_student_message(alumno)
    message_id = notifier.publish(subject, message)
    logger.info('Published notification %s for alumno %s', message_id, alumno_id)

    return {'message': 'Notificación enviada correctamente', 'messageId': message_id}
