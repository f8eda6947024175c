"""Sesion model definitions."""

from sqlalchemy import Boolean, Column, Integer, String
from backend.database import Base


class Sesion(Base):
    """Represents a login session issued to a student."""
    __tablename__ = "sesiones"

    id = Column(String(36), primary_key=True)
    fecha = Column(Integer, nullable=False)  # epoch seconds
    alumno_id = Column(Integer, index=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    session_string = Column(String(255), unique=True, index=True, nullable=False)
