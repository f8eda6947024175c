"""Alumno model definitions."""

from sqlalchemy import Column, Float, Integer, String
from backend.database import Base


class Alumno(Base):
    """Represents an enrolled student."""
    __tablename__ = "alumnos"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nombres = Column(String(255), nullable=False)
    apellidos = Column(String(255), nullable=False)
    matricula = Column(String(64), unique=True, index=True, nullable=False)
    promedio = Column(Float, nullable=False)
    foto_perfil_url = Column(String(512), nullable=True)
    password_hash = Column(String(255), nullable=True)
