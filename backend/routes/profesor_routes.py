import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.core.errors import MethodNotSupported, NotFound
from backend.dependencies import get_profesor_store
from backend.routes.validators import require_non_negative_number, require_string
from backend.stores.entity_store import EntityStore

router = APIRouter(tags=['profesores'])

logger = logging.getLogger(__name__)

PROFESOR_NOT_FOUND = 'Profesor no encontrado'


class ProfesorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    numero_empleado: str = Field(alias='numeroEmpleado')
    nombres: str
    apellidos: str
    horas_clase: float = Field(alias='horasClase')

    @field_validator('numero_empleado', mode='before')
    @classmethod
    def validate_numero_empleado(cls, value):
        return require_string(value, 'El numeroEmpleado debe ser de tipo string')

    @field_validator('nombres', 'apellidos', mode='before')
    @classmethod
    def validate_names(cls, value, info):
        return require_string(value, f'{info.field_name} debe ser de tipo string')

    @field_validator('horas_clase', mode='before')
    @classmethod
    def validate_horas_clase(cls, value):
        return require_non_negative_number(
            value,
            'Las horasClase deben ser un valor numérico',
            'Las horasClase no pueden ser negativas',
        )


class ProfesorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    numero_empleado: str = Field(alias='numeroEmpleado')
    nombres: str
    apellidos: str
    horas_clase: float = Field(alias='horasClase')


@router.get('', response_model=list[ProfesorResponse])
def list_profesores(store: EntityStore = Depends(get_profesor_store)):
    return store.list()


@router.post('', response_model=ProfesorResponse, status_code=status.HTTP_201_CREATED)
def create_profesor(data: ProfesorRequest, store: EntityStore = Depends(get_profesor_store)):
    profesor = store.create(data.model_dump())
    logger.info('Created profesor %s (%s)', profesor.id, profesor.numero_empleado)
    return profesor


@router.delete('')
def delete_all_profesores():
    raise MethodNotSupported('Método no soportado: no se pueden eliminar todos los profesores')


@router.get('/{profesor_id}', response_model=ProfesorResponse)
def get_profesor(profesor_id: int, store: EntityStore = Depends(get_profesor_store)):
    profesor = store.get(profesor_id)
    if profesor is None:
        raise NotFound(PROFESOR_NOT_FOUND)
    return profesor


@router.put('/{profesor_id}', response_model=ProfesorResponse)
def update_profesor(profesor_id: int, data: ProfesorRequest, store: EntityStore = Depends(get_profesor_store)):
    profesor = store.replace(profesor_id, data.model_dump())
    if profesor is None:
        raise NotFound(PROFESOR_NOT_FOUND)
    return profesor


@router.delete('/{profesor_id}')
def delete_profesor(profesor_id: int, store: EntityStore = Depends(get_profesor_store)):
    if not store.remove(profesor_id):
        raise NotFound(PROFESOR_NOT_FOUND)

    logger.info('Deleted profesor %s', profesor_id)
    return {'message': 'Profesor eliminado correctamente'}
