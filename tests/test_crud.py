import uuid
from datetime import date

import pytest

from app.crud import subscription as crud
from app.exceptions import SubscriptionNotFoundError
from app.schemas.subscription import SubscriptionRequest

OWNER = uuid.UUID("6f9619ff-8b86-d011-b42d-00c04fc964ff")
OTHER_OWNER = uuid.UUID("0e4f1c52-8f3b-4c3e-9a54-7c2b1d2d9a11")
TODAY = date(2025, 6, 18)


def make_request(**overrides):
    data = {
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": str(OWNER),
        "start_date": "01-2024",
        "end_date": "03-2024",
    }
    data.update(overrides)
    return SubscriptionRequest(**data)


def test_create_then_get_returns_equal_record(db_session):
    created = crud.create_subscription(db_session, make_request())
    fetched = crud.get_subscription(db_session, created.id)

    assert isinstance(created.id, uuid.UUID)
    assert fetched.id == created.id
    assert fetched.service_name == "Yandex Plus"
    assert fetched.price == 400
    assert fetched.user_id == OWNER
    assert fetched.start_date == date(2024, 1, 1)
    assert fetched.end_date == date(2024, 3, 1)


def test_get_unknown_id_raises(db_session):
    with pytest.raises(SubscriptionNotFoundError):
        crud.get_subscription(db_session, uuid.uuid4())


def test_update_replaces_all_fields_and_is_idempotent(db_session):
    created = crud.create_subscription(db_session, make_request())
    payload = make_request(service_name="Netflix", price=999, end_date=None, start_date="02-2024")

    crud.update_subscription(db_session, created.id, payload)
    first = crud.get_subscription(db_session, created.id)
    snapshot = (first.service_name, first.price, first.user_id, first.start_date, first.end_date)

    crud.update_subscription(db_session, created.id, payload)
    second = crud.get_subscription(db_session, created.id)

    assert snapshot == ("Netflix", 999, OWNER, date(2024, 2, 1), None)
    assert (second.service_name, second.price, second.user_id, second.start_date, second.end_date) == snapshot


def test_update_unknown_id_raises(db_session):
    with pytest.raises(SubscriptionNotFoundError):
        crud.update_subscription(db_session, uuid.uuid4(), make_request())


def test_delete_then_get_raises(db_session):
    created = crud.create_subscription(db_session, make_request())
    crud.delete_subscription(db_session, created.id)

    with pytest.raises(SubscriptionNotFoundError):
        crud.get_subscription(db_session, created.id)
    with pytest.raises(SubscriptionNotFoundError):
        crud.delete_subscription(db_session, created.id)


def test_list_filters_by_owner_and_service(db_session):
    crud.create_subscription(db_session, make_request(service_name="Netflix"))
    crud.create_subscription(db_session, make_request(service_name="Spotify"))
    crud.create_subscription(db_session, make_request(service_name="Netflix", user_id=str(OTHER_OWNER)))

    total, items = crud.list_subscriptions(db_session)
    assert total == 3 and len(items) == 3

    total, items = crud.list_subscriptions(db_session, user_id=OWNER)
    assert total == 2
    assert {s.service_name for s in items} == {"Netflix", "Spotify"}

    total, items = crud.list_subscriptions(db_session, user_id=OWNER, service_name="Netflix")
    assert total == 1
    assert items[0].user_id == OWNER


def test_list_pagination_keeps_total(db_session):
    for month in ("01-2024", "02-2024", "03-2024"):
        crud.create_subscription(db_session, make_request(start_date=month, end_date=None))

    total, items = crud.list_subscriptions(db_session, limit=2, offset=1)
    assert total == 3
    assert [s.start_date for s in items] == [date(2024, 2, 1), date(2024, 3, 1)]


def test_calculate_total_single_month(db_session):
    crud.create_subscription(db_session, make_request(price=100))

    assert crud.calculate_total(db_session, date(2024, 2, 1), date(2024, 2, 1), today=TODAY) == 100


def test_calculate_total_sums_matching_records(db_session):
    crud.create_subscription(db_session, make_request(price=50, start_date="01-2024", end_date="12-2024"))
    crud.create_subscription(db_session, make_request(price=70, start_date="01-2024", end_date="12-2024"))
    crud.create_subscription(
        db_session, make_request(price=1000, user_id=str(OTHER_OWNER), start_date="01-2024", end_date="12-2024")
    )

    total = crud.calculate_total(db_session, date(2024, 5, 1), date(2024, 5, 1), user_id=OWNER, today=TODAY)
    assert total == 120


def test_calculate_total_filters_by_service(db_session):
    crud.create_subscription(db_session, make_request(service_name="Netflix", price=10))
    crud.create_subscription(db_session, make_request(service_name="Spotify", price=20))

    total = crud.calculate_total(
        db_session, date(2024, 1, 1), date(2024, 3, 1), service_name="Spotify", today=TODAY
    )
    assert total == 60


def test_find_overlapping_excludes_disjoint_records(db_session):
    crud.create_subscription(db_session, make_request(price=10, start_date="01-2023", end_date="06-2023"))
    crud.create_subscription(db_session, make_request(price=20, start_date="01-2025", end_date="02-2025"))
    crud.create_subscription(db_session, make_request(price=30, start_date="03-2024", end_date="09-2024"))

    rows = crud.find_overlapping(db_session, date(2024, 1, 1), date(2024, 12, 1), today=TODAY)
    assert [row.price for row in rows] == [30]


def test_open_ended_record_uses_now_as_end(db_session):
    crud.create_subscription(db_session, make_request(price=10, start_date="01-2025", end_date=None))

    # Window runs past "now" (06-2025): billed Jan..Jun only
    assert crud.calculate_total(db_session, date(2025, 1, 1), date(2025, 12, 1), today=TODAY) == 60
    # Window entirely after now: nothing accrued yet
    assert crud.calculate_total(db_session, date(2025, 7, 1), date(2025, 12, 1), today=TODAY) == 0
    # Window in the past still intersects
    assert crud.calculate_total(db_session, date(2025, 2, 1), date(2025, 3, 1), today=TODAY) == 20
