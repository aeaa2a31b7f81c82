# backoffice/schemas/chat.py
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from backoffice.schemas.validators import check_required


class LeapingProxyRequest(BaseModel):
    reservation_id: str = Field(alias="reservationId")
    action: Optional[str] = None
    content: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def reserva_obrigatoria(cls, data: Any) -> Any:
        check_required(data, ("reservationId",), "Missing reservationId")
        return data

    @field_validator("reservation_id", mode="before")
    @classmethod
    def como_texto(cls, v):
        return str(v).strip()

    @field_validator("content", mode="before")
    @classmethod
    def conteudo_texto(cls, v):
        return None if v is None else str(v)


class SSEMessage(BaseModel):
    """Quadro ``data:`` enviado pelo agente."""
    type: str
    sender: Optional[Literal["user", "bot"]] = None
    content: Optional[str] = None


class ChatMessage(BaseModel):
    id: str
    sender: Literal["user", "bot"]
    content: str
    timestamp: str
