"""Profesor model definitions."""

from sqlalchemy import Column, Float, Integer, String
from backend.database import Base


class Profesor(Base):
    """Represents a teacher."""
    __tablename__ = "profesores"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    numero_empleado = Column(String(64), unique=True, index=True, nullable=False)
    nombres = Column(String(255), nullable=False)
    apellidos = Column(String(255), nullable=False)
    horas_clase = Column(Float, nullable=False)
