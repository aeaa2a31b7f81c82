# backoffice/schemas/reservation.py
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator, model_validator

from backoffice.db.models.reservation import ReservationStatus
from backoffice.schemas.validators import (
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_PEOPLE,
    MIN_PEOPLE,
    check_required,
)


def parse_iso_datetime(value: str) -> datetime:
    """ISO 8601 -> datetime em UTC. Horários sem fuso são tratados como UTC."""
    texto = value.strip()
    if texto.endswith(("Z", "z")):
        texto = texto[:-1] + "+00:00"
    parsed = datetime.fromisoformat(texto)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class ReservaCreate(BaseModel):
    customer_name: str
    customer_phone: str
    number_of_people: int
    reservation_time: datetime

    @model_validator(mode="before")
    @classmethod
    def campos_obrigatorios(cls, data: Any) -> Any:
        check_required(
            data,
            ("customer_name", "customer_phone", "number_of_people", "reservation_time"),
            "Missing required fields: customer_name, customer_phone, number_of_people, reservation_time",
        )
        return data

    @field_validator("customer_name", mode="before")
    @classmethod
    def validar_nome(cls, v):
        if not isinstance(v, str) or not v.strip() or len(v) > MAX_NAME_LENGTH:
            raise ValueError(
                f"Invalid customer_name: must be a non-empty string with max {MAX_NAME_LENGTH} characters"
            )
        return v.strip()

    @field_validator("customer_phone", mode="before")
    @classmethod
    def validar_telefone(cls, v):
        if not isinstance(v, str) or not v.strip() or len(v) > MAX_PHONE_LENGTH:
            raise ValueError(
                f"Invalid customer_phone: must be a non-empty string with max {MAX_PHONE_LENGTH} characters"
            )
        return v.strip()

    @field_validator("number_of_people", mode="before")
    @classmethod
    def validar_pessoas(cls, v):
        valido = (
            isinstance(v, (int, float))
            and not isinstance(v, bool)
            and float(v).is_integer()
            and MIN_PEOPLE <= v <= MAX_PEOPLE
        )
        if not valido:
            raise ValueError(
                f"Invalid number_of_people: must be a number between {MIN_PEOPLE} and {MAX_PEOPLE}"
            )
        return int(v)

    @field_validator("reservation_time", mode="before")
    @classmethod
    def validar_horario(cls, v):
        try:
            return parse_iso_datetime(v)
        except (TypeError, ValueError, AttributeError):
            raise ValueError("Invalid reservation_time: must be a valid ISO 8601 date")


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus

    @model_validator(mode="before")
    @classmethod
    def status_obrigatorio(cls, data: Any) -> Any:
        check_required(data, ("status",), "Status is required")
        return data

    @field_validator("status", mode="before")
    @classmethod
    def status_valido(cls, v):
        if v not in [s.value for s in ReservationStatus]:
            raise ValueError("Invalid status value")
        return v


class AvailabilityCheck(BaseModel):
    """Consulta de disponibilidade vinda do agente de reservas."""
    date: str
    time: str
    number_of_people: Any = None

    @model_validator(mode="before")
    @classmethod
    def campos_obrigatorios(cls, data: Any) -> Any:
        check_required(
            data,
            ("date", "time", "numberOfPeople"),
            "Missing required fields: date, time, numberOfPeople",
        )
        return {"date": data["date"], "time": data["time"], "number_of_people": data["numberOfPeople"]}

    @field_validator("date", "time", mode="before")
    @classmethod
    def como_texto(cls, v):
        return str(v).strip()


class AvailabilityResponse(BaseModel):
    available: bool
    reason: Optional[str] = None
    message: Optional[str] = None


# --- Saída ---
class ReservationSchema(BaseModel):
    id: uuid.UUID
    customer_name: str
    customer_phone: str
    number_of_people: int
    reservation_time: datetime
    status: ReservationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ReservationCreatedResponse(BaseModel):
    success: bool = True
    reservation: ReservationSchema


class ReservationList(BaseModel):
    reservations: List[ReservationSchema]
