"""cria tabelas de pedidos, reservas e aprovações

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

order_status = sa.Enum(
    "pending", "confirmed", "preparing", "ready", "delivered", "cancelled", name="order_status"
)
reservation_status = sa.Enum("pending", "confirmed", "rejected", "completed", name="reservation_status")
approval_status = sa.Enum("pending", "approved", "rejected", name="approval_status")


def _base_columns():
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "orders",
        *_base_columns(),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(50), nullable=False),
        sa.Column("products", sa.JSON(), nullable=False),
        sa.Column("status", order_status, nullable=False),
    )
    op.create_index("ix_orders_id", "orders", ["id"])
    op.create_index("ix_orders_created_at", "orders", ["created_at"])
    op.create_index("ix_orders_status", "orders", ["status"])

    op.create_table(
        "reservations",
        *_base_columns(),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(50), nullable=False),
        sa.Column("number_of_people", sa.Integer(), nullable=False),
        sa.Column("reservation_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", reservation_status, nullable=False),
    )
    op.create_index("ix_reservations_id", "reservations", ["id"])
    op.create_index("ix_reservations_created_at", "reservations", ["created_at"])
    op.create_index("ix_reservations_reservation_time", "reservations", ["reservation_time"])
    op.create_index("ix_reservations_status", "reservations", ["status"])

    op.create_table(
        "reservation_approvals",
        *_base_columns(),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(50), nullable=False),
        sa.Column("reservation_date", sa.Date(), nullable=False),
        sa.Column("reservation_time", sa.Time(), nullable=False),
        sa.Column("number_of_people", sa.Integer(), nullable=False),
        sa.Column("conversation_id", sa.String(100), nullable=True),
        sa.Column("status", approval_status, nullable=False),
        sa.Column("worker_notes", sa.Text(), nullable=True),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_reservation_approvals_id", "reservation_approvals", ["id"])
    op.create_index("ix_reservation_approvals_created_at", "reservation_approvals", ["created_at"])
    op.create_index("ix_reservation_approvals_conversation_id", "reservation_approvals", ["conversation_id"])
    op.create_index("ix_reservation_approvals_status", "reservation_approvals", ["status"])


def downgrade() -> None:
    op.drop_table("reservation_approvals")
    op.drop_table("reservations")
    op.drop_table("orders")
    bind = op.get_bind()
    approval_status.drop(bind, checkfirst=True)
    reservation_status.drop(bind, checkfirst=True)
    order_status.drop(bind, checkfirst=True)
