# backoffice/api/v1/endpoints/dashboard.py
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud, schemas
from backoffice.api import deps
from backoffice.core.logging import logger
from backoffice.db.models.order import ACTIVE_ORDER_STATUSES
from backoffice.db.models.reservation import ACTIVE_RESERVATION_STATUSES
from backoffice.db.models.reservation_approval import ApprovalStatus
from backoffice.services.approval_service import approval_service
from backoffice.services.realtime_service import TABLES, realtime_feed

router = APIRouter()


# --- Pedidos ---
@router.get("/orders", response_model=schemas.OrderList)
async def pedidos_ativos(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """Pedidos em andamento (pendente, em preparo, pronto), mais recentes primeiro."""
    try:
        orders = await crud.order.get_multi(db, statuses=ACTIVE_ORDER_STATUSES)
    except Exception as e:
        logger.error(f"Erro ao listar pedidos ativos: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch orders")
    return {"orders": orders}


@router.patch("/orders/{order_id}/status", response_model=schemas.OrderWriteResponse)
async def atualizar_status_pedido(
    order_id: str, body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)
) -> Any:
    status_in = deps.parse_payload(schemas.OrderStatusUpdate, body)
    order_uuid = deps.parse_uuid(order_id)
    order = await crud.order.get(db, id=order_uuid) if order_uuid else None
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    try:
        order = await crud.order.update_status(db, db_obj=order, status=status_in.status)
    except Exception as e:
        logger.error(f"Erro ao atualizar pedido {order_id} pelo painel: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update order")
    return {"success": True, "order": order, "message": "Order updated successfully"}


# --- Reservas ---
@router.get("/reservations", response_model=schemas.ReservationList)
async def reservas_ativas(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """Reservas pendentes e confirmadas, pela ordem do horário."""
    try:
        reservations = await crud.reservation.get_multi(db, statuses=ACTIVE_RESERVATION_STATUSES)
    except Exception as e:
        logger.error(f"Erro ao listar reservas: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch reservations")
    return {"reservations": reservations}


@router.patch("/reservations/{reservation_id}/status", response_model=schemas.ReservationCreatedResponse)
async def atualizar_status_reserva(
    reservation_id: str, body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)
) -> Any:
    status_in = deps.parse_payload(schemas.ReservationStatusUpdate, body)
    reservation_uuid = deps.parse_uuid(reservation_id)
    reservation = await crud.reservation.get(db, id=reservation_uuid) if reservation_uuid else None
    if not reservation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found")
    try:
        reservation = await crud.reservation.update_status(db, db_obj=reservation, status=status_in.status)
    except Exception as e:
        logger.error(f"Erro ao atualizar reserva {reservation_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update reservation"
        )
    return {"success": True, "reservation": reservation}


# --- Aprovações ---
@router.get("/approvals", response_model=schemas.ApprovalList)
async def aprovacoes_pendentes(db: AsyncSession = Depends(deps.get_db)) -> Any:
    try:
        approvals = await crud.reservation_approval.get_multi(db, status=ApprovalStatus.PENDING)
    except Exception as e:
        logger.error(f"Erro ao listar aprovações pendentes: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch approvals")
    return {"approvals": approvals}


@router.post("/approvals/{approval_id}/respond", response_model=schemas.ApprovalDecisionResponse)
async def responder_aprovacao(
    approval_id: str, body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Aprova ou rejeita um pedido de reserva.
    Na aprovação, cria a reserva confirmada. Se essa criação falhar, a decisão
    já gravada é mantida e a resposta traz `warning`.
    """
    decision = deps.parse_payload(schemas.ApprovalDecision, body)
    approval_uuid = deps.parse_uuid(approval_id)
    approval = await crud.reservation_approval.get(db, id=approval_uuid) if approval_uuid else None
    if not approval:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Approval request not found")

    try:
        approval, reservation, warning = await approval_service.respond(
            db,
            approval=approval,
            status=ApprovalStatus(decision.status),
            worker_notes=decision.worker_notes,
        )
    except Exception as e:
        logger.error(f"Erro ao responder aprovação {approval_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update approval request"
        )

    if warning:
        message = warning
    elif reservation:
        message = "Reservation approved and created"
    else:
        message = "Reservation request rejected"
    return {
        "success": True,
        "approval": approval,
        "reservation": reservation,
        "warning": warning,
        "message": message,
    }


# --- Tempo real ---
@router.get("/realtime/{table}")
async def feed_tempo_real(table: str, request: Request):
    """
    Stream SSE com as alterações (INSERT/UPDATE/DELETE) da tabela.
    Um comentário `: keep-alive` é enviado nos intervalos sem eventos.
    """
    if table not in TABLES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown table")

    pubsub = await realtime_feed.subscribe(table)
    if pubsub is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Realtime feed unavailable")

    async def event_stream():
        try:
            async for data in realtime_feed.events(pubsub):
                if await request.is_disconnected():
                    break
                if data is None:
                    yield ": keep-alive\n\n"
                else:
                    yield f"data: {data}\n\n"
        finally:
            await realtime_feed.unsubscribe(pubsub, table)

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
