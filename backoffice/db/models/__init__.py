# Importa todos os modelos para que a Base (e o Alembic) conheça as tabelas
from backoffice.db.models.order import Order, OrderStatus, ACTIVE_ORDER_STATUSES
from backoffice.db.models.reservation import Reservation, ReservationStatus, ACTIVE_RESERVATION_STATUSES
from backoffice.db.models.reservation_approval import ReservationApproval, ApprovalStatus
