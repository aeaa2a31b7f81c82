# backoffice/crud/crud_reservation.py
import uuid
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models.reservation import Reservation, ReservationStatus
from backoffice.services.realtime_service import RealtimeFeed, realtime_feed


class CRUDReservation:
    table = "reservations"

    def __init__(self, feed: RealtimeFeed = realtime_feed):
        self.feed = feed

    async def get(self, db: AsyncSession, id: uuid.UUID) -> Optional[Reservation]:
        result = await db.execute(select(Reservation).where(Reservation.id == id))
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        *,
        statuses: Optional[Sequence[ReservationStatus]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Reservation]:
        query = select(Reservation)
        if statuses:
            query = query.where(Reservation.status.in_(statuses))
        query = query.order_by(Reservation.reservation_time.asc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create(
        self,
        db: AsyncSession,
        *,
        customer_name: str,
        customer_phone: str,
        number_of_people: int,
        reservation_time: datetime,
        status: ReservationStatus = ReservationStatus.PENDING,
    ) -> Reservation:
        db_obj = Reservation(
            customer_name=customer_name,
            customer_phone=customer_phone,
            number_of_people=number_of_people,
            reservation_time=reservation_time,
            status=status,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        await self.feed.publish(self.table, "INSERT", new=db_obj.as_dict())
        return db_obj

    async def update_status(
        self, db: AsyncSession, *, db_obj: Reservation, status: ReservationStatus
    ) -> Reservation:
        old = db_obj.as_dict()
        db_obj.status = status
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        await self.feed.publish(self.table, "UPDATE", new=db_obj.as_dict(), old=old)
        return db_obj

    async def count_people_between(
        self,
        db: AsyncSession,
        *,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> int:
        """Soma de pessoas das reservas com horário em [start, end]."""
        result = await db.execute(
            select(func.coalesce(func.sum(Reservation.number_of_people), 0)).where(
                Reservation.reservation_time >= start,
                Reservation.reservation_time <= end,
                Reservation.status.in_(statuses),
            )
        )
        return int(result.scalar_one())


reservation = CRUDReservation()
