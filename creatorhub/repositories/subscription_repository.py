from creatorhub.db import db, utcnow
from creatorhub.models.subscription_model import Subscription


def get_active(subscriber_id: int, creator_id: int):
    return (
        Subscription.query
        .filter(
            Subscription.subscriber_id == subscriber_id,
            Subscription.creator_id == creator_id,
            Subscription.end_date > utcnow(),
        )
        .order_by(Subscription.end_date.desc())
        .first()
    )


def has_active(subscriber_id: int, creator_id: int) -> bool:
    return get_active(subscriber_id, creator_id) is not None


def get_active_creator_ids(subscriber_id: int, creator_ids) -> set[int]:
    creator_ids = set(creator_ids)
    if not creator_ids:
        return set()

    rows = (
        db.session.query(Subscription.creator_id)
        .filter(
            Subscription.subscriber_id == subscriber_id,
            Subscription.creator_id.in_(creator_ids),
            Subscription.end_date > utcnow(),
        )
        .distinct()
        .all()
    )
    return {row[0] for row in rows}


def create_subscription(subscriber_id: int, creator_id: int, end_date):
    subscription = Subscription(
        subscriber_id=subscriber_id,
        creator_id=creator_id,
        start_date=utcnow(),
        end_date=end_date,
    )
    db.session.add(subscription)
    db.session.commit()
    return subscription


def end_subscription(subscription):
    subscription.end_date = utcnow()
    db.session.commit()
    return subscription


def _paginate(query, page: int, size: int):
    total = query.count()
    items = query.offset((page - 1) * size).limit(size).all()
    return items, total


def list_by_subscriber(subscriber_id: int, page: int, size: int, active_only: bool = False):
    query = Subscription.query.filter(Subscription.subscriber_id == subscriber_id)
    if active_only:
        query = query.filter(Subscription.end_date > utcnow())
    return _paginate(query.order_by(Subscription.start_date.desc()), page, size)


def list_by_creator(creator_id: int, page: int, size: int, active_only: bool = False):
    query = Subscription.query.filter(Subscription.creator_id == creator_id)
    if active_only:
        query = query.filter(Subscription.end_date > utcnow())
    return _paginate(query.order_by(Subscription.start_date.desc()), page, size)


def count_active_subscribers(creator_id: int) -> int:
    return (
        db.session.query(Subscription.subscriber_id)
        .filter(
            Subscription.creator_id == creator_id,
            Subscription.end_date > utcnow(),
        )
        .distinct()
        .count()
    )


def get_active_creator_ids_for(subscriber_id: int) -> list[int]:
    rows = (
        db.session.query(Subscription.creator_id)
        .filter(
            Subscription.subscriber_id == subscriber_id,
            Subscription.end_date > utcnow(),
        )
        .distinct()
        .all()
    )
    return [row[0] for row in rows]
