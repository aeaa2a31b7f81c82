# backoffice/api/v1/endpoints/reservation_approvals.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud, schemas
from backoffice.api import deps
from backoffice.api.errors import APIError
from backoffice.core.logging import logger

router = APIRouter()

APPROVAL_NOT_FOUND = "Approval request not found"


@router.post("/request-reservation-approval", response_model=schemas.ApprovalCreatedResponse)
async def request_reservation_approval(body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    O agente registra um pedido de reserva que precisa de confirmação da equipe.
    O agente consulta o andamento depois em /check-approval-status.
    """
    approval_in = deps.parse_payload(schemas.ApprovalRequestCreate, body, approvalId=None)
    try:
        approval = await crud.reservation_approval.create(db, obj_in=approval_in)
    except Exception as e:
        logger.error(f"Erro ao criar pedido de aprovação: {str(e)}")
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create approval request", approvalId=None)

    logger.info(
        f"Pedido de aprovação {approval.id} criado: {approval.reservation_date} {approval.reservation_time}, "
        f"{approval.number_of_people} pessoas"
    )
    return {
        "success": True,
        "approvalId": approval.id,
        "message": "Approval request created. Please wait for staff confirmation.",
    }


@router.post("/check-approval-status", response_model=schemas.ApprovalStatusResponse)
async def check_approval_status(body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    query = deps.parse_payload(schemas.ApprovalStatusQuery, body, status="error")
    approval_uuid = deps.parse_uuid(query.approval_id)
    if not approval_uuid:
        raise APIError(status.HTTP_404_NOT_FOUND, APPROVAL_NOT_FOUND, status="error")
    try:
        approval = await crud.reservation_approval.get(db, id=approval_uuid)
    except Exception as e:
        logger.error(f"Erro ao consultar aprovação {query.approval_id}: {str(e)}")
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e), status="error")
    if not approval:
        raise APIError(status.HTTP_404_NOT_FOUND, APPROVAL_NOT_FOUND, status="error")

    return {
        "status": approval.status,
        "workerNotes": approval.worker_notes,
        "respondedAt": approval.responded_at,
    }
