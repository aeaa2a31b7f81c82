# backoffice/crud/crud_order.py
import uuid
from typing import List, Optional, Sequence, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models.order import Order, OrderStatus
from backoffice.schemas.order import OrderCreate, PedidoCreate
from backoffice.services.realtime_service import RealtimeFeed, realtime_feed


class CRUDOrder:
    table = "orders"

    def __init__(self, feed: RealtimeFeed = realtime_feed):
        self.feed = feed

    async def get(self, db: AsyncSession, id: uuid.UUID) -> Optional[Order]:
        result = await db.execute(select(Order).where(Order.id == id))
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        *,
        statuses: Optional[Sequence[OrderStatus]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Order]:
        query = select(Order)
        if statuses:
            query = query.where(Order.status.in_(statuses))
        query = query.order_by(Order.created_at.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: Union[OrderCreate, PedidoCreate]) -> Order:
        db_obj = Order(
            customer_name=obj_in.customer_name,
            customer_phone=obj_in.customer_phone,
            products=obj_in.products,
            status=OrderStatus.PENDING,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        await self.feed.publish(self.table, "INSERT", new=db_obj.as_dict())
        return db_obj

    async def update_status(self, db: AsyncSession, *, db_obj: Order, status: OrderStatus) -> Order:
        # Sem máquina de estados: a equipe pode mover o pedido para qualquer status
        old = db_obj.as_dict()
        db_obj.status = status
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        await self.feed.publish(self.table, "UPDATE", new=db_obj.as_dict(), old=old)
        return db_obj

    async def remove(self, db: AsyncSession, *, id: uuid.UUID) -> Optional[Order]:
        obj = await self.get(db, id=id)
        if obj:
            old = obj.as_dict()
            await db.delete(obj)
            await db.commit()
            await self.feed.publish(self.table, "DELETE", old=old)
        return obj


order = CRUDOrder()
