"""
Services package - reusable business logic and utilities.

Este paquete contiene el pipeline de entrada del perfil, independiente de los
blueprints: normalización, validación, sanitización y escape.
"""

__all__ = [
    "normalize",
    "policy",
    "profile",
    "request_utils",
    "sanitize",
    "validate",
]
