"""
Servicio de validación de los campos del perfil.

Cada validador normaliza primero el valor recibido y devuelve siempre un
``ValidationResult``; los errores son datos, nunca excepciones.
"""
from dataclasses import asdict, dataclass
from typing import Dict, Mapping, Optional

from .normalize import normalize_email, normalize_text
from .policy import DEFAULT_POLICY, ValidationPolicy

PROFILE_FIELDS = ("name", "email", "comment")


@dataclass(frozen=True)
class ValidationResult:
    """Resultado uniforme de validación de un campo."""

    ok: bool
    value: str
    message: str = ""

    def __post_init__(self):
        if self.ok and self.message:
            raise ValueError("Un resultado válido no lleva mensaje")
        if not self.ok and not self.message:
            raise ValueError("Un resultado inválido necesita un mensaje")

    @classmethod
    def valid(cls, value: str) -> "ValidationResult":
        return cls(ok=True, value=value, message="")

    @classmethod
    def invalid(cls, value: str, message: str) -> "ValidationResult":
        return cls(ok=False, value=value, message=message)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def validate_name(value, policy: Optional[ValidationPolicy] = None) -> ValidationResult:
    """
    Valida el nombre introducido en el formulario.

    Args:
        value: Nombre sin normalizar
        policy: Política de validación; por defecto ``DEFAULT_POLICY``

    Returns:
        ValidationResult con el nombre normalizado
    """
    policy = policy or DEFAULT_POLICY
    text = normalize_text(value)
    if not text:
        return ValidationResult.invalid(text, policy.messages["name_required"])
    if not policy.name_pattern.match(text):
        return ValidationResult.invalid(text, policy.messages["name_pattern"])
    return ValidationResult.valid(text)


def validate_email(value, policy: Optional[ValidationPolicy] = None) -> ValidationResult:
    """
    Valida un email: limpia espacios y lo pasa a minúsculas antes de comprobar
    el formato.
    """
    policy = policy or DEFAULT_POLICY
    text = normalize_email(value)
    if not text:
        return ValidationResult.invalid(text, policy.messages["email_required"])
    if not policy.email_pattern.match(text):
        return ValidationResult.invalid(text, policy.messages["email_format"])
    return ValidationResult.valid(text)


def validate_comment(value, policy: Optional[ValidationPolicy] = None) -> ValidationResult:
    """
    Valida un comentario. Solo es obligatorio si la política lo indica; la
    longitud se mide en caracteres sobre el valor ya normalizado.
    """
    policy = policy or DEFAULT_POLICY
    text = normalize_text(value)
    if policy.comment_required and not text:
        return ValidationResult.invalid(text, policy.messages["comment_required"])
    if len(text) > policy.comment_max_length:
        return ValidationResult.invalid(text, policy.messages["comment_length"])
    return ValidationResult.valid(text)


_VALIDATORS = {
    "name": validate_name,
    "email": validate_email,
    "comment": validate_comment,
}


def validate_profile(
    data: Optional[Mapping], policy: Optional[ValidationPolicy] = None
) -> Dict[str, ValidationResult]:
    """
    Valida los tres campos del perfil de forma independiente.

    Todos los campos se evalúan siempre, para poder mostrar todos los
    mensajes de error a la vez. Cualquier cosa que no sea un mapeo se trata
    como un perfil vacío.
    """
    if not isinstance(data, Mapping):
        data = {}
    return {name: _VALIDATORS[name](data.get(name), policy) for name in PROFILE_FIELDS}
