# backoffice/schemas/validators.py
"""Regras de validação compartilhadas pelos schemas de entrada.

Os canais de pedido (formulários e agentes de voz/chat) enviam JSON pouco
tipado; as regras abaixo reproduzem a semântica "truthy" desses clientes:
``None``, ``""``, ``0`` e ``False`` contam como campo ausente.
"""
import math
import re
from typing import Any, Iterable, Optional

PHONE_REGEX = re.compile(r"^[\d\s+\-()]+$")
DATE_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_REGEX = re.compile(r"^\d{2}:\d{2}:\d{2}$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

MAX_NAME_LENGTH = 200
MAX_PHONE_LENGTH = 50
MAX_PRODUCT_LENGTH = 200
MAX_PRODUCTS = 50
MAX_PRODUCTS_TEXT_LENGTH = 2000
MAX_CONVERSATION_ID_LENGTH = 100
MIN_PEOPLE = 1
MAX_PEOPLE = 100


def is_missing(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


def check_required(data: Any, fields: Iterable[str], message: str) -> None:
    if not isinstance(data, dict):
        raise ValueError("Invalid request body")
    if any(is_missing(data.get(field)) for field in fields):
        raise ValueError(message)


def sanitize_name(value: Any) -> str:
    name = str(value).strip()[:MAX_NAME_LENGTH]
    if not name:
        raise ValueError("Customer name cannot be empty")
    return name


def sanitize_phone(value: Any) -> str:
    phone = str(value).strip()[:MAX_PHONE_LENGTH]
    if not PHONE_REGEX.fullmatch(phone):
        raise ValueError("Invalid phone number format")
    return phone


def parse_int(value: Any) -> Optional[int]:
    """Converte como ``parseInt`` (prefixo numérico); ``None`` se não houver número."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None
