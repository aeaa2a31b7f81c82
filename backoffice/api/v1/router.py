from fastapi import APIRouter

from backoffice.api.v1.endpoints import (
    orders,
    create_order,
    pedidos,
    reservas,
    reservation_approvals,
    availability,
    leaping_proxy,
    dashboard,
)

api_router_v1 = APIRouter()

api_router_v1.include_router(orders.router, prefix="/orders", tags=["Pedidos"])
api_router_v1.include_router(create_order.router, tags=["Agente"])
api_router_v1.include_router(pedidos.router, tags=["Pedidos"])
api_router_v1.include_router(reservas.router, tags=["Reservas"])
api_router_v1.include_router(reservation_approvals.router, tags=["Agente"])
api_router_v1.include_router(availability.router, tags=["Agente"])
api_router_v1.include_router(leaping_proxy.router, tags=["Chat"])
api_router_v1.include_router(dashboard.router, prefix="/dashboard", tags=["Painel"])
