# app/models/subscription.py

import uuid

from sqlalchemy import BigInteger, CheckConstraint, Column, Date, String, Uuid

from app.db.database import Base


class Subscription(Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_subscriptions_price_non_negative"),
        CheckConstraint(
            "end_date IS NULL OR start_date <= end_date",
            name="ck_subscriptions_period_order",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    service_name = Column(String, nullable=False, index=True)
    price = Column(BigInteger, nullable=False)  # Smallest currency unit
    user_id = Column(Uuid, nullable=False, index=True)

    # Always the first day of the month
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # NULL = still active

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} service={self.service_name} user_id={self.user_id}>"
