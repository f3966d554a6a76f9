from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

from ..core.constants import MAX_PROFILE_IMAGE_BYTES, PHONE_DIGITS
from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\(\d{2}\) \d{5}-\d{4}$")
DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} deve ter pelo menos {min_len} caracteres")
    return value


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value or ""))


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_RE.match(value or ""))


def format_phone(raw: str) -> str:
    """Apply the `(DD) DDDDD-DDDD` mask to whatever digits were typed.

    Only digits are kept, capped at 11; the mask is applied once all 11 are
    present, otherwise the bare digits are returned.
    """
    digits = re.sub(r"\D", "", raw or "")[:PHONE_DIGITS]
    return re.sub(r"(\d{2})(\d{5})(\d{4})", r"(\1) \2-\3", digits)


def profile_image_size(data_url: str) -> int:
    """Decoded size in bytes of an inline `data:<mime>;base64,...` image."""
    match = DATA_URL_RE.match(data_url or "")
    if not match or not match.group("mime").startswith("image/"):
        raise ValidationError("Imagem de perfil inválida")
    try:
        return len(base64.b64decode(match.group("payload"), validate=True))
    except (binascii.Error, ValueError):
        raise ValidationError("Imagem de perfil inválida")


def check_profile_image(data_url: Optional[str]) -> Optional[str]:
    if not data_url:
        return None
    if profile_image_size(data_url) > MAX_PROFILE_IMAGE_BYTES:
        raise ValidationError("A imagem deve ter no máximo 5MB")
    return data_url
