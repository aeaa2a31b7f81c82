from datetime import datetime, timezone
import enum
import uuid

from sqlalchemy import Column, DateTime, Uuid, func
from sqlalchemy.orm import as_declarative, declared_attr


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@as_declarative()
class Base:
    """
    Base class which provides automated table name
    and surrogate primary key column.
    """

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"  # Ex: Order -> orders

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    def as_dict(self) -> dict:
        """Linha como dicionário serializável em JSON (respostas e feed realtime)."""
        row = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, uuid.UUID):
                value = str(value)
            elif isinstance(value, enum.Enum):
                value = value.value
            elif hasattr(value, "isoformat"):
                value = value.isoformat()
            row[column.name] = value
        return row
