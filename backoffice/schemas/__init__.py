# backoffice/schemas/__init__.py
from .order import (
    OrderCreate, PedidoCreate, OrderStatusUpdate, OrderSchema, OrderList, OrderDetail,
    OrderWriteResponse, OrderCreatedResponse, PedidoCreatedResponse, DeleteResponse,
)
from .reservation import (
    ReservaCreate, ReservationStatusUpdate, AvailabilityCheck, AvailabilityResponse,
    ReservationSchema, ReservationCreatedResponse, ReservationList,
)
from .reservation_approval import (
    ApprovalRequestCreate, ApprovalStatusQuery, ApprovalDecision, ReservationApprovalSchema,
    ApprovalCreatedResponse, ApprovalStatusResponse, ApprovalList, ApprovalDecisionResponse,
)
from .chat import LeapingProxyRequest, SSEMessage, ChatMessage
