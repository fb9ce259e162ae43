"""
Políticas de validación y sanitización del formulario de perfil.

Las reglas (expresiones regulares, límites de longitud, listas permitidas)
no viven en constantes globales mutables: se agrupan en objetos inmutables
que se inyectan en los validadores y en el sanitizador. Así los tests y la
configuración de la app pueden variar los límites sin tocar estado compartido.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Mapping, Optional, Pattern, Tuple

# Letras con el conjunto fijo de acentos admitido por el formulario.
NAME_LETTERS = "A-Za-zÁÉÍÓÚáéíóúÑñÜü"

# Formato simplificado (no RFC) a propósito:
#   ok  pepe@gmail.com
#   mal pepe@com, pepe@@mail.com, pepe pepe@mail.com
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$"


def build_name_pattern(min_length: int, max_length: int) -> Pattern[str]:
    return re.compile(rf"^[{NAME_LETTERS} ]{{{min_length},{max_length}}}$")


@dataclass(frozen=True)
class ValidationPolicy:
    """Reglas que aplican los validadores de nombre, email y comentario."""

    name_min_length: int = 2
    name_max_length: int = 50
    email_pattern: Pattern[str] = field(default_factory=lambda: re.compile(EMAIL_PATTERN))
    comment_max_length: int = 500
    comment_required: bool = False
    name_pattern: Optional[Pattern[str]] = None

    def __post_init__(self):
        if self.name_min_length < 1 or self.name_max_length < self.name_min_length:
            raise ValueError(
                f"Límites de nombre inválidos: {self.name_min_length}-{self.name_max_length}"
            )
        if self.comment_max_length < 0:
            raise ValueError(f"Longitud máxima de comentario inválida: {self.comment_max_length}")
        if self.name_pattern is None:
            object.__setattr__(
                self,
                "name_pattern",
                build_name_pattern(self.name_min_length, self.name_max_length),
            )

    @property
    def messages(self) -> Dict[str, str]:
        return {
            "name_required": "El nombre es obligatorio",
            "name_pattern": (
                "Solo letras y espacios, se permiten acentos "
                f"({self.name_min_length}-{self.name_max_length})"
            ),
            "email_required": "El email es obligatorio",
            "email_format": "Formato de email no válido",
            "comment_required": "El comentario es obligatorio",
            "comment_length": f"Máximo {self.comment_max_length} caracteres",
        }

    def with_limits(self, **changes) -> "ValidationPolicy":
        """Devuelve una copia con otros límites (el patrón de nombre se recalcula)."""
        if "name_min_length" in changes or "name_max_length" in changes:
            changes.setdefault("name_pattern", None)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": {
                "pattern": self.name_pattern.pattern,
                "min_length": self.name_min_length,
                "max_length": self.name_max_length,
            },
            "email": {"pattern": self.email_pattern.pattern},
            "comment": {
                "max_length": self.comment_max_length,
                "required": self.comment_required,
            },
        }


@dataclass(frozen=True)
class SanitizePolicy:
    """Lista permitida de etiquetas, atributos por etiqueta y esquemas de URL."""

    tags: FrozenSet[str] = frozenset(
        {"b", "strong", "i", "em", "u", "p", "br", "ul", "ol", "li", "code", "pre", "a"}
    )
    attributes: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
        ("a", ("href", "target", "rel")),
    )
    protocols: FrozenSet[str] = frozenset({"http", "https", "mailto"})

    @property
    def attribute_map(self) -> Dict[str, list]:
        return {tag: list(names) for tag, names in self.attributes}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tags": sorted(self.tags),
            "attributes": self.attribute_map,
            "protocols": sorted(self.protocols),
        }


DEFAULT_POLICY = ValidationPolicy()
DEFAULT_SANITIZE_POLICY = SanitizePolicy()


def policy_from_config(config: Mapping[str, Any]) -> ValidationPolicy:
    """Construye la política de validación a partir de ``app.config``."""
    return ValidationPolicy(
        name_min_length=int(config.get("PROFILE_NAME_MIN_LENGTH", 2)),
        name_max_length=int(config.get("PROFILE_NAME_MAX_LENGTH", 50)),
        comment_max_length=int(config.get("PROFILE_COMMENT_MAX_LENGTH", 500)),
        comment_required=_as_bool(config.get("PROFILE_COMMENT_REQUIRED", False)),
    )


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def sanitize_policy_from_config(config: Mapping[str, Any]) -> SanitizePolicy:
    """Construye la política de sanitización; usa los valores por defecto si faltan."""
    tags = config.get("SANITIZE_ALLOWED_TAGS")
    protocols = config.get("SANITIZE_ALLOWED_PROTOCOLS")
    return SanitizePolicy(
        tags=frozenset(tags) if tags else DEFAULT_SANITIZE_POLICY.tags,
        attributes=DEFAULT_SANITIZE_POLICY.attributes,
        protocols=frozenset(protocols) if protocols else DEFAULT_SANITIZE_POLICY.protocols,
    )
