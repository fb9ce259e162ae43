"""
Routes package - endpoints de la API del perfil.
"""
from flask import Blueprint

# Blueprint único para la API
api = Blueprint("api", __name__)

# Importar módulos de rutas después de crear blueprints para evitar circular imports
from . import (
    health,
    meta,
    profile,
)

__all__ = ["api"]
