"""
Content access: the visibility gate and the state it depends on.

``evaluate_access`` decides, ``SubscriptionStore`` resolves subscription
state per request, and ``access_for_post`` ties them together for routes.
"""
from creatorhub.access.cursor import MediaCursor
from creatorhub.access.evaluator import (
    ContentAccess,
    InvalidInput,
    Viewer,
    evaluate_access,
)
from creatorhub.access.gate import access_for_post, access_for_posts
from creatorhub.access.subscription_store import SubscriptionStore, get_subscription_store

__all__ = [
    "ContentAccess",
    "InvalidInput",
    "MediaCursor",
    "SubscriptionStore",
    "Viewer",
    "access_for_post",
    "access_for_posts",
    "evaluate_access",
    "get_subscription_store",
]
