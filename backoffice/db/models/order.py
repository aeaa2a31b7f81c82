# backoffice/db/models/order.py
import enum

from sqlalchemy import Column, String, JSON, Enum as SAEnum

from backoffice.db.base_class import Base


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Status exibidos no painel da cozinha
ACTIVE_ORDER_STATUSES = [OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY]


class Order(Base):
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    products = Column(JSON, nullable=False, default=list)  # lista de strings
    status = Column(
        SAEnum(OrderStatus, name="order_status", values_callable=lambda e: [m.value for m in e]),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
