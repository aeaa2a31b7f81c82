# backoffice/api/v1/endpoints/orders.py
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud, schemas
from backoffice.api import deps
from backoffice.core.logging import logger

router = APIRouter()

ORDER_NOT_FOUND = "Order not found"


@router.get("", response_model=schemas.OrderList)
async def list_orders(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Lista todos os pedidos, do mais recente para o mais antigo.
    """
    try:
        orders = await crud.order.get_multi(db)
    except Exception as e:
        logger.error(f"Erro ao listar pedidos: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch orders")
    return {"orders": orders}


@router.get("/{order_id}", response_model=schemas.OrderDetail)
async def get_order(order_id: str, db: AsyncSession = Depends(deps.get_db)) -> Any:
    order_uuid = deps.parse_uuid(order_id)
    if not order_uuid:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ORDER_NOT_FOUND)
    try:
        order = await crud.order.get(db, id=order_uuid)
    except Exception as e:
        logger.error(f"Erro ao obter pedido {order_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch order")
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ORDER_NOT_FOUND)
    return {"order": order}


@router.post("", response_model=schemas.OrderWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_order(body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Cria um pedido com status "pending".
    O nome é cortado em 200 caracteres, o telefone em 50 e cada produto em 200.
    """
    order_in = deps.parse_payload(schemas.OrderCreate, body)
    try:
        order = await crud.order.create(db, obj_in=order_in)
    except Exception as e:
        logger.error(f"Erro ao criar pedido: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create order")

    logger.info(f"Pedido {order.id} criado para {order.customer_name}")
    return {"success": True, "order": order, "message": "Order created successfully"}


@router.patch("/{order_id}", response_model=schemas.OrderWriteResponse)
async def update_order_status(order_id: str, body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Atualiza o status do pedido. Qualquer status válido é aceito (sem transições obrigatórias).
    """
    status_in = deps.parse_payload(schemas.OrderStatusUpdate, body)
    order_uuid = deps.parse_uuid(order_id)
    if not order_uuid:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ORDER_NOT_FOUND)
    try:
        order = await crud.order.get(db, id=order_uuid)
        if order:
            order = await crud.order.update_status(db, db_obj=order, status=status_in.status)
    except Exception as e:
        logger.error(f"Erro ao atualizar pedido {order_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update order")
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ORDER_NOT_FOUND)

    logger.info(f"Status do pedido {order_id} atualizado para {status_in.status.value}")
    return {"success": True, "order": order, "message": "Order updated successfully"}


@router.delete("/{order_id}", response_model=schemas.DeleteResponse)
async def delete_order(order_id: str, db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Remove o pedido definitivamente. Um id inexistente também responde com sucesso.
    """
    order_uuid = deps.parse_uuid(order_id)
    try:
        if order_uuid:
            await crud.order.remove(db, id=order_uuid)
    except Exception as e:
        logger.error(f"Erro ao remover pedido {order_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete order")

    logger.info(f"Pedido {order_id} removido")
    return {"success": True, "message": "Order deleted successfully"}
