# app/routers/subscription.py - Subscription CRUD and total cost

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.crud import subscription as crud
from app.db.database import get_db
from app.exceptions import SubscriptionNotFoundError
from app.schemas.subscription import SubscriptionRequest, SubscriptionResponse, TotalResponse
from app.utils.periods import parse_month

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def parse_uuid(value: str, name: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        raise HTTPException(status_code=400, detail=f"invalid {name}")


def owner_filter(
    user_id: Optional[str] = Query(None, description="Filter by owner UUID"),
    owner_id: Optional[str] = Query(None, description="Alias of user_id"),
) -> Optional[uuid.UUID]:
    parsed = {
        name: parse_uuid(value, name)
        for name, value in (("user_id", user_id), ("owner_id", owner_id))
        if value
    }
    if len(set(parsed.values())) > 1:
        raise HTTPException(status_code=400, detail="user_id and owner_id must match")
    return next(iter(parsed.values()), None)


def _storage_error(db: Session, action: str, e: SQLAlchemyError):
    db.rollback()
    logger.error(f"Failed to {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(e)}",
    )


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
def create_subscription(payload: SubscriptionRequest, db: Session = Depends(get_db)):
    """Create a subscription; the id is generated by the server."""
    try:
        return crud.create_subscription(db, payload)
    except SQLAlchemyError as e:
        raise _storage_error(db, "create subscription", e)


@router.get("", response_model=List[SubscriptionResponse])
def list_subscriptions(
    response: Response,
    user_id: Optional[uuid.UUID] = Depends(owner_filter),
    service_name: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """List subscriptions, optionally filtered by owner and service name.

    The unpaginated match count is returned in ``X-Total-Count``.
    """
    try:
        total, items = crud.list_subscriptions(
            db, user_id=user_id, service_name=service_name or None, limit=limit, offset=offset
        )
    except SQLAlchemyError as e:
        raise _storage_error(db, "list subscriptions", e)
    response.headers["X-Total-Count"] = str(total)
    return items


# Registered before /{subscription_id} so "total" is not taken for an id
@router.get("/total", response_model=TotalResponse)
def total_cost(
    user_id: Optional[uuid.UUID] = Depends(owner_filter),
    service_name: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None, alias="from", description="MM-YYYY"),
    date_to: Optional[str] = Query(None, alias="to", description="MM-YYYY"),
    db: Session = Depends(get_db),
):
    """Total cost of matching subscriptions inside the ``from``..``to`` months."""
    if not date_from or not date_to:
        raise HTTPException(status_code=400, detail="from and to parameters are required")

    try:
        period_from = parse_month(date_from)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid from date format, expected MM-YYYY")
    try:
        period_to = parse_month(date_to)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid to date format, expected MM-YYYY")

    if period_from > period_to:
        raise HTTPException(status_code=400, detail="from must be before or equal to to")

    try:
        total = crud.calculate_total(
            db, period_from, period_to, user_id=user_id, service_name=service_name or None
        )
    except SQLAlchemyError as e:
        raise _storage_error(db, "calculate total", e)
    return {"total": total}


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(subscription_id: str, db: Session = Depends(get_db)):
    sub_id = parse_uuid(subscription_id, "UUID")
    try:
        return crud.get_subscription(db, sub_id)
    except SubscriptionNotFoundError:
        raise HTTPException(status_code=404, detail="subscription not found")
    except SQLAlchemyError as e:
        raise _storage_error(db, "get subscription", e)


@router.put("/{subscription_id}", response_model=SubscriptionResponse)
def update_subscription(
    subscription_id: str,
    payload: SubscriptionRequest,
    db: Session = Depends(get_db),
):
    """Full replacement of an existing subscription."""
    sub_id = parse_uuid(subscription_id, "UUID")
    try:
        return crud.update_subscription(db, sub_id, payload)
    except SubscriptionNotFoundError:
        raise HTTPException(status_code=404, detail="subscription not found")
    except SQLAlchemyError as e:
        raise _storage_error(db, "update subscription", e)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(subscription_id: str, db: Session = Depends(get_db)):
    sub_id = parse_uuid(subscription_id, "UUID")
    try:
        crud.delete_subscription(db, sub_id)
    except SubscriptionNotFoundError:
        raise HTTPException(status_code=404, detail="subscription not found")
    except SQLAlchemyError as e:
        raise _storage_error(db, "delete subscription", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
