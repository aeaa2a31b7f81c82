# backoffice/api/v1/endpoints/pedidos.py
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud, schemas
from backoffice.api import deps
from backoffice.core.logging import logger

router = APIRouter()


@router.post("/pedidos", response_model=schemas.PedidoCreatedResponse, status_code=status.HTTP_201_CREATED)
async def criar_pedido(body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Entrada legada de pedidos (campos em snake_case).
    `products` pode vir como lista ou como texto livre; texto vira uma lista de um item.
    """
    pedido_in = deps.parse_payload(schemas.PedidoCreate, body)
    try:
        order = await crud.order.create(db, obj_in=pedido_in)
    except Exception as e:
        logger.error(f"Erro ao criar pedido (/pedidos): {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"Pedido {order.id} criado via /pedidos")
    return {"success": True, "order": order}
