# app/crud/subscription.py - Subscription store

import logging
import uuid
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.exceptions import SubscriptionNotFoundError
from app.models.subscription import Subscription
from app.schemas.subscription import SubscriptionRequest
from app.services.cost import total_cost
from app.utils.periods import current_month

logger = logging.getLogger(__name__)


def _filtered(db: Session, user_id: Optional[uuid.UUID], service_name: Optional[str]):
    query = db.query(Subscription)
    if user_id is not None:
        query = query.filter(Subscription.user_id == user_id)
    if service_name is not None:
        query = query.filter(Subscription.service_name == service_name)
    return query


def create_subscription(db: Session, data: SubscriptionRequest) -> Subscription:
    db_sub = Subscription(
        id=uuid.uuid4(),
        service_name=data.service_name,
        price=data.price,
        user_id=data.user_id,
        start_date=data.start_date,
        end_date=data.end_date,
    )
    db.add(db_sub)
    db.commit()
    db.refresh(db_sub)
    logger.info(f"Created subscription with ID: {db_sub.id}")
    return db_sub


def get_subscription(db: Session, subscription_id: uuid.UUID) -> Subscription:
    db_sub = db.get(Subscription, subscription_id)
    if db_sub is None:
        raise SubscriptionNotFoundError(subscription_id)
    return db_sub


def update_subscription(db: Session, subscription_id: uuid.UUID, data: SubscriptionRequest) -> Subscription:
    """Replace every mutable field of an existing subscription."""
    db_sub = get_subscription(db, subscription_id)

    db_sub.service_name = data.service_name
    db_sub.price = data.price
    db_sub.user_id = data.user_id
    db_sub.start_date = data.start_date
    db_sub.end_date = data.end_date

    db.commit()
    db.refresh(db_sub)
    logger.info(f"Updated subscription {subscription_id}")
    return db_sub


def delete_subscription(db: Session, subscription_id: uuid.UUID) -> None:
    db_sub = get_subscription(db, subscription_id)
    db.delete(db_sub)
    db.commit()
    logger.info(f"Deleted subscription {subscription_id}")


def list_subscriptions(
    db: Session,
    user_id: Optional[uuid.UUID] = None,
    service_name: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> Tuple[int, List[Subscription]]:
    """Return ``(total, page)``; ``total`` ignores limit/offset."""
    query = _filtered(db, user_id, service_name)
    total = query.count()
    items = (
        query.order_by(Subscription.start_date, Subscription.id)
        .offset(offset)
        .limit(limit)
        .all()
    )
    return total, items


def find_overlapping(
    db: Session,
    date_from: date,
    date_to: date,
    user_id: Optional[uuid.UUID] = None,
    service_name: Optional[str] = None,
    today: Optional[date] = None,
):
    """Rows whose active interval intersects ``[date_from, date_to]``.

    Open-ended rows are treated as running until the current month.
    """
    now = current_month(today)
    effective_end = func.coalesce(Subscription.end_date, now)
    query = (
        _filtered(db, user_id, service_name)
        .with_entities(Subscription.price, Subscription.start_date, Subscription.end_date)
        .filter(Subscription.start_date <= date_to, effective_end >= date_from)
    )
    return query.all()


def calculate_total(
    db: Session,
    date_from: date,
    date_to: date,
    user_id: Optional[uuid.UUID] = None,
    service_name: Optional[str] = None,
    today: Optional[date] = None,
) -> int:
    now = current_month(today)
    rows = find_overlapping(db, date_from, date_to, user_id, service_name, today=now)
    return total_cost(rows, date_from, date_to, now)
