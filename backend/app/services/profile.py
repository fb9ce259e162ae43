"""
Pipeline de entrada del perfil: Normalizar -> Validar -> Sanitizar.

Se ejecuta igual en el cliente y en el servidor (defensa en profundidad).
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .policy import SanitizePolicy, ValidationPolicy
from .sanitize import escape_html, sanitize_html
from .validate import ValidationResult, validate_profile


@dataclass(frozen=True)
class ProfileOutcome:
    """Resultado agregado del perfil: válido solo si lo son los tres campos."""

    results: Dict[str, ValidationResult]
    comment_sanitized: Optional[str] = None

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results.values())

    @property
    def errors(self) -> Dict[str, str]:
        return {name: result.message for name, result in self.results.items() if not result.ok}

    @property
    def saved(self) -> Optional[Dict[str, str]]:
        if not self.ok:
            return None
        return {
            "name": self.results["name"].value,
            "email": self.results["email"].value,
            "commentSanitized": self.comment_sanitized or "",
        }

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "saved": self.saved}
        return {"ok": False, "errors": self.errors}


def process_profile(
    data: Optional[Mapping],
    policy: Optional[ValidationPolicy] = None,
    sanitize_policy: Optional[SanitizePolicy] = None,
) -> ProfileOutcome:
    """
    Procesa un envío del formulario de perfil.

    Args:
        data: Diccionario con ``name``, ``email`` y ``comment`` sin confiar
        policy: Política de validación
        sanitize_policy: Lista permitida para el comentario

    Returns:
        ProfileOutcome; el comentario solo se sanitiza si todo el perfil es válido
    """
    results = validate_profile(data, policy)
    if not all(result.ok for result in results.values()):
        return ProfileOutcome(results=results)
    return ProfileOutcome(
        results=results,
        comment_sanitized=sanitize_html(results["comment"].value, sanitize_policy),
    )


def render_profile_html(saved: Mapping[str, str]) -> str:
    """
    Genera la tarjeta HTML de un perfil guardado.

    El nombre y el email se escapan; el comentario ya viene sanitizado y se
    inserta como HTML.
    """
    return (
        '<article class="profile">'
        f'<h3>{escape_html(saved.get("name"))}</h3>'
        f'<p class="email">{escape_html(saved.get("email"))}</p>'
        f'<div class="comment">{saved.get("commentSanitized") or ""}</div>'
        "</article>"
    )
