import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.core.errors import ApiError, describe_request_errors
from backend.database import Base, engine, ensure_alumno_schema
from backend.dependencies import MemoryStores
from backend.models import alumno, profesor, sesion  # noqa: F401  registers the tables
from backend.routes import alumno_routes, profesor_routes, session_routes

app = FastAPI(title='Escuela API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.state.memory_stores = MemoryStores()

logger = logging.getLogger(__name__)
logging.getLogger('backend').setLevel(config.LOG_LEVEL)


@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={'error': describe_request_errors(exc.errors())})


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    if config.STORE_BACKEND != 'sql':
        logger.info('Using in-memory stores; records last for the process lifetime.')
        return

    try:
        Base.metadata.create_all(bind=engine)
        ensure_alumno_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/', response_class=PlainTextResponse)
def root():
    return '¡Hola! Esta es la raíz de tu API REST.'


@app.get('/health')
def health():
    return {'status': 'ok', 'store': config.STORE_BACKEND}


app.include_router(alumno_routes.router, prefix='/alumnos')
app.include_router(session_routes.router, prefix='/alumnos')
app.include_router(profesor_routes.router, prefix='/profesores')
