# backoffice/api/v1/endpoints/create_order.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud, schemas
from backoffice.api import deps
from backoffice.api.errors import APIError
from backoffice.core.logging import logger

router = APIRouter()


@router.post("/create-order", response_model=schemas.OrderCreatedResponse)
async def create_order(body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Pedido feito pelo agente de voz/chat. Mesmas regras de POST /orders,
    mas a resposta traz apenas o id do pedido criado.
    """
    order_in = deps.parse_payload(schemas.OrderCreate, body, orderId=None)
    try:
        order = await crud.order.create(db, obj_in=order_in)
    except Exception as e:
        logger.error(f"Erro ao criar pedido pelo agente: {str(e)}")
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create order", orderId=None)

    logger.info(f"Pedido {order.id} criado pelo agente para {order.customer_name}")
    return {
        "success": True,
        "orderId": order.id,
        "message": "Order created successfully. Your order is being prepared.",
    }
