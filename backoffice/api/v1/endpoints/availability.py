# backoffice/api/v1/endpoints/availability.py
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import schemas
from backoffice.api import deps
from backoffice.core.logging import logger
from backoffice.services.availability_service import availability_service

router = APIRouter()


def _unavailable(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"available": False, "reason": reason},
    )


@router.post(
    "/check-reservation-availability",
    response_model=schemas.AvailabilityResponse,
    response_model_exclude_none=True,
)
async def check_reservation_availability(body: Any = Body(None), db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Consulta do agente antes de oferecer um horário:
    data passada, fora do expediente ou sem capacidade retornam `available: false` com o motivo.
    """
    try:
        check_in = schemas.AvailabilityCheck.model_validate(body)
    except ValidationError as e:
        return _unavailable(deps.validation_message(e))

    try:
        available, text = await availability_service.check(
            db,
            date=check_in.date,
            time=check_in.time,
            number_of_people=check_in.number_of_people,
        )
    except ValueError as e:
        return _unavailable(str(e))
    except Exception as e:
        logger.error(f"Erro ao verificar disponibilidade: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if available:
        return {"available": True, "message": text}
    return {"available": False, "reason": text}
