# backoffice/api/v1/endpoints/reservas.py
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import crud, schemas
from backoffice.api import deps
from backoffice.core.logging import logger

router = APIRouter()


@router.post("/reservas", response_model=schemas.ReservationCreatedResponse, status_code=status.HTTP_201_CREATED)
async def criar_reserva(body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Cria uma reserva pendente. O horário é gravado em UTC.
    A capacidade do horário não é verificada aqui (ver /check-reservation-availability).
    """
    reserva_in = deps.parse_payload(schemas.ReservaCreate, body)
    try:
        reservation = await crud.reservation.create(
            db,
            customer_name=reserva_in.customer_name,
            customer_phone=reserva_in.customer_phone,
            number_of_people=reserva_in.number_of_people,
            reservation_time=reserva_in.reservation_time,
        )
    except Exception as e:
        logger.error(f"Erro ao criar reserva: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"Reserva {reservation.id} criada para {reservation.reservation_time.isoformat()}")
    return {"success": True, "reservation": reservation}
