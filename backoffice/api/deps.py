# backoffice/api/deps.py
import uuid
from typing import Any, Optional, Type, TypeVar

from fastapi import status
from pydantic import BaseModel, ValidationError

from backoffice.api.errors import APIError
from backoffice.database import get_db  # noqa: F401 (dependência usada pelos endpoints)
from backoffice.services.leaping_service import LeapingAIClient, leaping_client_from_settings

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validation_message(exc: ValidationError) -> str:
    """Mensagem do primeiro erro, sem o prefixo "Value error, " do pydantic."""
    first = exc.errors()[0]
    error = first.get("ctx", {}).get("error")
    if error is not None:
        return str(error)
    return first["msg"]


def parse_payload(schema: Type[SchemaT], body: Any, **extra) -> SchemaT:
    """Valida o corpo JSON com o schema; erros viram 400 com os campos extras do endpoint."""
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        raise APIError(status.HTTP_400_BAD_REQUEST, validation_message(e), **extra)


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def get_leaping_client() -> Optional[LeapingAIClient]:
    return leaping_client_from_settings()
