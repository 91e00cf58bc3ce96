"""create subscriptions table

Revision ID: 0001
Revises:
Create Date: 2025-07-14 12:00:00

"""
import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("service_name", sa.String(), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.CheckConstraint("price >= 0", name="ck_subscriptions_price_non_negative"),
        sa.CheckConstraint(
            "end_date IS NULL OR start_date <= end_date",
            name="ck_subscriptions_period_order",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_subscriptions_service_name", "subscriptions", ["service_name"])
    op.create_index("ix_subscriptions_user_id", "subscriptions", ["user_id"])


def downgrade():
    op.drop_index("ix_subscriptions_user_id", table_name="subscriptions")
    op.drop_index("ix_subscriptions_service_name", table_name="subscriptions")
    op.drop_table("subscriptions")
