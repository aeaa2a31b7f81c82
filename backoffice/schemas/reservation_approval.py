# backoffice/schemas/reservation_approval.py
import uuid
from datetime import date as date_type, datetime, time as time_type
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from backoffice.db.models.reservation_approval import ApprovalStatus
from backoffice.schemas.reservation import ReservationSchema
from backoffice.schemas.validators import (
    DATE_REGEX,
    MAX_CONVERSATION_ID_LENGTH,
    MAX_PEOPLE,
    MIN_PEOPLE,
    TIME_REGEX,
    check_required,
    is_missing,
    parse_int,
    sanitize_name,
    sanitize_phone,
)


def one_year_from(today: date_type) -> date_type:
    try:
        return today.replace(year=today.year + 1)
    except ValueError:  # 29/02
        return today.replace(year=today.year + 1, day=28)


class ApprovalRequestCreate(BaseModel):
    """Pedido de aprovação de reserva criado pelo agente de conversação."""
    customer_name: str = Field(alias="customerName")
    customer_phone: str = Field(alias="customerPhone")
    reservation_date: date_type = Field(alias="date")
    reservation_time: time_type = Field(alias="time")
    number_of_people: int = Field(alias="numberOfPeople")
    conversation_id: Optional[str] = Field(default=None, alias="conversationId")

    @model_validator(mode="before")
    @classmethod
    def campos_obrigatorios(cls, data: Any) -> Any:
        check_required(
            data,
            ("customerName", "customerPhone", "date", "time", "numberOfPeople"),
            "Missing required fields",
        )
        return data

    @field_validator("customer_name", mode="before")
    @classmethod
    def validar_nome(cls, v):
        return sanitize_name(v)

    @field_validator("customer_phone", mode="before")
    @classmethod
    def validar_telefone(cls, v):
        return sanitize_phone(v)

    @field_validator("reservation_date", mode="before")
    @classmethod
    def validar_data(cls, v):
        texto = str(v)
        if not DATE_REGEX.fullmatch(texto):
            raise ValueError("Invalid date format. Use YYYY-MM-DD")
        try:
            data = date_type.fromisoformat(texto)
        except ValueError:
            raise ValueError("Invalid date format. Use YYYY-MM-DD")
        today = date_type.today()
        if data < today:
            raise ValueError("Reservation date cannot be in the past")
        if data > one_year_from(today):
            raise ValueError("Reservation date cannot be more than 1 year in the future")
        return data

    @field_validator("reservation_time", mode="before")
    @classmethod
    def validar_hora(cls, v):
        texto = str(v)
        if not TIME_REGEX.fullmatch(texto):
            raise ValueError("Invalid time format. Use HH:MM:SS")
        try:
            return time_type.fromisoformat(texto)
        except ValueError:
            raise ValueError("Invalid time format. Use HH:MM:SS")

    @field_validator("number_of_people", mode="before")
    @classmethod
    def validar_pessoas(cls, v):
        pessoas = parse_int(v)
        if pessoas is None or not MIN_PEOPLE <= pessoas <= MAX_PEOPLE:
            raise ValueError(f"Number of people must be between {MIN_PEOPLE} and {MAX_PEOPLE}")
        return pessoas

    @field_validator("conversation_id", mode="before")
    @classmethod
    def limpar_conversa(cls, v):
        if is_missing(v):
            return None
        return str(v).strip()[:MAX_CONVERSATION_ID_LENGTH]


class ApprovalStatusQuery(BaseModel):
    approval_id: str = Field(alias="approvalId")

    @model_validator(mode="before")
    @classmethod
    def id_obrigatorio(cls, data: Any) -> Any:
        check_required(data, ("approvalId",), "Missing approvalId")
        return data

    @field_validator("approval_id", mode="before")
    @classmethod
    def como_texto(cls, v):
        return str(v).strip()


class ApprovalDecision(BaseModel):
    """Resposta da equipe a um pedido pendente."""
    status: Literal["approved", "rejected"]
    worker_notes: Optional[str] = None

    @field_validator("worker_notes", mode="before")
    @classmethod
    def notas_vazias(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip()


# --- Saída ---
class ReservationApprovalSchema(BaseModel):
    id: uuid.UUID
    customer_name: str
    customer_phone: str
    reservation_date: date_type
    reservation_time: time_type
    number_of_people: int
    conversation_id: Optional[str] = None
    status: ApprovalStatus
    worker_notes: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApprovalCreatedResponse(BaseModel):
    success: bool = True
    approvalId: uuid.UUID
    message: str


class ApprovalStatusResponse(BaseModel):
    status: ApprovalStatus
    workerNotes: Optional[str] = None
    respondedAt: Optional[datetime] = None


class ApprovalList(BaseModel):
    approvals: List[ReservationApprovalSchema]


class ApprovalDecisionResponse(BaseModel):
    success: bool
    approval: ReservationApprovalSchema
    reservation: Optional[ReservationSchema] = None
    warning: Optional[str] = None
    message: str
