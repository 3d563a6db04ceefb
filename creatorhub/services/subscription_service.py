import logging
from datetime import timedelta

from flask import current_app

from creatorhub.db import utcnow
from creatorhub.errors import NotFoundError
from creatorhub.repositories import subscription_repository, user_repository

logger = logging.getLogger(__name__)


def _resolve_pair(subscriber_username: str, creator_username: str):
    subscriber = user_repository.get_by_username(subscriber_username)
    creator = user_repository.get_by_username(creator_username)
    if not subscriber or not creator:
        raise NotFoundError("User not found")
    return subscriber, creator


def subscribe(subscriber_username: str, creator_username: str):
    """Return ``(subscription, created)``; an active subscription is reused."""
    if not isinstance(creator_username, str) or not creator_username.strip():
        raise ValueError("Creator is required")

    subscriber, creator = _resolve_pair(subscriber_username, creator_username.strip())
    if subscriber.id == creator.id:
        raise ValueError("You cannot subscribe to yourself")
    if not creator.is_creator:
        raise ValueError("User is not a creator")

    existing = subscription_repository.get_active(subscriber.id, creator.id)
    if existing:
        return existing, False

    period = timedelta(days=current_app.config.get("SUBSCRIPTION_PERIOD_DAYS", 30))
    subscription = subscription_repository.create_subscription(
        subscriber_id=subscriber.id,
        creator_id=creator.id,
        end_date=utcnow() + period,
    )
    logger.info("User %s subscribed to creator %s", subscriber.id, creator.id)
    return subscription, True


def unsubscribe(subscriber_username: str, creator_username: str) -> bool:
    subscriber, creator = _resolve_pair(subscriber_username, creator_username)

    active = subscription_repository.get_active(subscriber.id, creator.id)
    if not active:
        return False

    subscription_repository.end_subscription(active)
    logger.info("User %s unsubscribed from creator %s", subscriber.id, creator.id)
    return True


def check(subscriber_username: str, creator_username: str) -> dict:
    subscriber, creator = _resolve_pair(subscriber_username, creator_username)
    active = subscription_repository.get_active(subscriber.id, creator.id)
    return {
        "id": active.id if active else None,
        "end_date": active.end_date.isoformat() if active else None,
        "active": active is not None,
    }


def _page(items, total, page, size):
    subscriber_ids = {item.subscriber_id for item in items}
    creator_ids = {item.creator_id for item in items}
    users = user_repository.get_by_ids(subscriber_ids | creator_ids)
    return {
        "content": [
            {
                "id": item.id,
                "subscriber": users.get(item.subscriber_id),
                "creator": users.get(item.creator_id),
                "start_date": item.start_date,
                "end_date": item.end_date,
                "is_active": item.is_active,
            }
            for item in items
        ],
        "page": page,
        "size": size,
        "total": total,
    }


def get_my_subscriptions(username: str, page: int, size: int, active_only: bool = False):
    user = user_repository.get_by_username(username)
    if not user:
        raise NotFoundError("User not found")
    items, total = subscription_repository.list_by_subscriber(user.id, page, size, active_only)
    return _page(items, total, page, size)


def get_creator_subscribers(username: str, page: int, size: int, active_only: bool = False):
    user = user_repository.get_by_username(username)
    if not user:
        raise NotFoundError("User not found")
    if not user.is_creator:
        raise ValueError("Only creators have subscribers")
    items, total = subscription_repository.list_by_creator(user.id, page, size, active_only)
    return _page(items, total, page, size)
