from .crud_order import order
from .crud_reservation import reservation
from .crud_reservation_approval import reservation_approval
