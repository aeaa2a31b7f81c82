# backoffice/services/approval_service.py
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud
from backoffice.core.logging import logger
from backoffice.db.models.reservation import Reservation, ReservationStatus
from backoffice.db.models.reservation_approval import ApprovalStatus, ReservationApproval

RESERVATION_NOT_CREATED = "Approval updated but failed to create reservation"


class ApprovalService:
    async def respond(
        self,
        db: AsyncSession,
        *,
        approval: ReservationApproval,
        status: ApprovalStatus,
        worker_notes: Optional[str] = None,
    ) -> Tuple[ReservationApproval, Optional[Reservation], Optional[str]]:
        """
        Registra a decisão da equipe e, se aprovada, cria a reserva confirmada.
        São duas escritas independentes: se a segunda falhar, a aprovação
        continua registrada e o aviso é devolvido ao painel.
        Retorna (aprovação, reserva criada, aviso).
        """
        approval = await crud.reservation_approval.respond(
            db, db_obj=approval, status=status, worker_notes=worker_notes
        )
        logger.info(f"Pedido de aprovação {approval.id} marcado como {status.value}")

        if status != ApprovalStatus.APPROVED:
            return approval, None, None

        reservation_time = datetime.combine(
            approval.reservation_date, approval.reservation_time, tzinfo=timezone.utc
        )
        try:
            reservation = await crud.reservation.create(
                db,
                customer_name=approval.customer_name,
                customer_phone=approval.customer_phone,
                number_of_people=approval.number_of_people,
                reservation_time=reservation_time,
                status=ReservationStatus.CONFIRMED,
            )
        except Exception as e:
            await db.rollback()
            await db.refresh(approval)
            logger.error(f"Erro ao criar reserva para a aprovação {approval.id}: {str(e)}")
            return approval, None, RESERVATION_NOT_CREATED

        logger.info(f"Reserva {reservation.id} criada a partir da aprovação {approval.id}")
        return approval, reservation, None


approval_service = ApprovalService()
