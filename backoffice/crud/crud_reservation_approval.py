# backoffice/crud/crud_reservation_approval.py
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models.reservation_approval import ApprovalStatus, ReservationApproval
from backoffice.schemas.reservation_approval import ApprovalRequestCreate
from backoffice.services.realtime_service import RealtimeFeed, realtime_feed


class CRUDReservationApproval:
    table = "reservation_approvals"

    def __init__(self, feed: RealtimeFeed = realtime_feed):
        self.feed = feed

    async def get(self, db: AsyncSession, id: uuid.UUID) -> Optional[ReservationApproval]:
        result = await db.execute(select(ReservationApproval).where(ReservationApproval.id == id))
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        *,
        status: Optional[ApprovalStatus] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[ReservationApproval]:
        query = select(ReservationApproval)
        if status:
            query = query.where(ReservationApproval.status == status)
        query = query.order_by(ReservationApproval.created_at.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: ApprovalRequestCreate) -> ReservationApproval:
        db_obj = ReservationApproval(
            customer_name=obj_in.customer_name,
            customer_phone=obj_in.customer_phone,
            reservation_date=obj_in.reservation_date,
            reservation_time=obj_in.reservation_time,
            number_of_people=obj_in.number_of_people,
            conversation_id=obj_in.conversation_id,
            status=ApprovalStatus.PENDING,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        await self.feed.publish(self.table, "INSERT", new=db_obj.as_dict())
        return db_obj

    async def respond(
        self,
        db: AsyncSession,
        *,
        db_obj: ReservationApproval,
        status: ApprovalStatus,
        worker_notes: Optional[str] = None,
    ) -> ReservationApproval:
        old = db_obj.as_dict()
        db_obj.status = status
        db_obj.worker_notes = worker_notes
        db_obj.responded_at = datetime.now(timezone.utc)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        await self.feed.publish(self.table, "UPDATE", new=db_obj.as_dict(), old=old)
        return db_obj


reservation_approval = CRUDReservationApproval()
