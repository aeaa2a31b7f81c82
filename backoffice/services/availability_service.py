# backoffice/services/availability_service.py
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud
from backoffice.core.config import settings
from backoffice.core.logging import logger
from backoffice.db.models.reservation import ACTIVE_RESERVATION_STATUSES
from backoffice.schemas.reservation import parse_iso_datetime
from backoffice.schemas.validators import parse_int


def _hour_label(hour: int) -> str:
    suffix = "AM" if hour < 12 or hour == 24 else "PM"
    return f"{(hour - 1) % 12 + 1}:00 {suffix}"


def opening_hours_label() -> str:
    return f"{_hour_label(settings.OPENING_HOUR)} - {_hour_label(settings.CLOSING_HOUR)}"


def slot_datetime(date: str, time: str) -> Optional[datetime]:
    try:
        return parse_iso_datetime(f"{date}T{time}")
    except ValueError:
        return None


class AvailabilityService:
    """Verifica se um horário comporta mais um grupo.

    A capacidade é checada apenas aqui, no momento da consulta; nada impede
    que reservas criadas depois ultrapassem o limite.
    """

    def __init__(
        self,
        max_capacity: int = settings.MAX_CAPACITY_PER_SLOT,
        window_minutes: int = settings.SLOT_WINDOW_MINUTES,
        opening_hour: int = settings.OPENING_HOUR,
        closing_hour: int = settings.CLOSING_HOUR,
    ):
        self.max_capacity = max_capacity
        self.window = timedelta(minutes=window_minutes)
        self.opening_hour = opening_hour
        self.closing_hour = closing_hour

    async def check(
        self,
        db: AsyncSession,
        *,
        date: str,
        time: str,
        number_of_people,
        now: Optional[datetime] = None,
    ) -> Tuple[bool, str]:
        """Retorna (disponível, motivo/mensagem). ValueError se data/hora/pessoas forem inválidos."""
        slot = slot_datetime(date, time)
        people = parse_int(number_of_people)
        if slot is None or people is None or people < 1:
            raise ValueError("Invalid date, time or numberOfPeople")

        now = now or datetime.now(timezone.utc)
        if slot < now:
            return False, "Cannot make reservations in the past"

        if slot.hour < self.opening_hour or slot.hour >= self.closing_hour:
            return False, f"Restaurant is closed. Hours: {opening_hours_label()}"

        total_people = await crud.reservation.count_people_between(
            db,
            start=slot - self.window,
            end=slot + self.window,
            statuses=ACTIVE_RESERVATION_STATUSES,
        )
        logger.info(f"Pessoas no horário {slot.isoformat()}: {total_people}, solicitadas: {people}")

        if total_people + people > self.max_capacity:
            return False, (
                f"Not enough capacity. Maximum {self.max_capacity} people per time slot. "
                f"Currently {total_people} people reserved."
            )
        return True, "Reservation slot available"


availability_service = AvailabilityService()
