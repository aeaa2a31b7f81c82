# backoffice/db/models/reservation_approval.py
import enum

from sqlalchemy import Column, String, Integer, Date, Time, DateTime, Text, Enum as SAEnum

from backoffice.db.base_class import Base


class ApprovalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReservationApproval(Base):
    __tablename__ = "reservation_approvals"

    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    reservation_date = Column(Date, nullable=False)
    reservation_time = Column(Time, nullable=False)
    number_of_people = Column(Integer, nullable=False)
    # Conversa do agente que originou o pedido (sem chave estrangeira)
    conversation_id = Column(String(100), nullable=True, index=True)
    status = Column(
        SAEnum(ApprovalStatus, name="approval_status", values_callable=lambda e: [m.value for m in e]),
        default=ApprovalStatus.PENDING,
        nullable=False,
        index=True,
    )
    worker_notes = Column(Text, nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)
