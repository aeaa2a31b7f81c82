# backoffice/db/models/reservation.py
import enum

from sqlalchemy import Column, String, Integer, DateTime, Enum as SAEnum

from backoffice.db.base_class import Base


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    COMPLETED = "completed"


# Reservas que ocupam lugares no salão (contam para a capacidade e aparecem no painel)
ACTIVE_RESERVATION_STATUSES = [ReservationStatus.PENDING, ReservationStatus.CONFIRMED]


class Reservation(Base):
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    number_of_people = Column(Integer, nullable=False)
    reservation_time = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(
        SAEnum(ReservationStatus, name="reservation_status", values_callable=lambda e: [m.value for m in e]),
        default=ReservationStatus.PENDING,
        nullable=False,
        index=True,
    )
