from flask import current_app

from creatorhub.access.evaluator import ContentAccess, Viewer, evaluate_access, is_public_post
from creatorhub.access.subscription_store import SubscriptionStore, get_subscription_store


def _strict() -> bool:
    return bool(current_app.config.get("ACCESS_STRICT_MODE", False))


def _needs_subscription_check(post, viewer: Viewer) -> bool:
    if viewer.id is None or viewer.is_owner:
        return False
    return not is_public_post(post)


def access_for_post(post, viewer_id, store: SubscriptionStore | None = None) -> ContentAccess:
    """Resolve subscription state only when it can change the outcome."""
    viewer = Viewer.for_post(viewer_id, post)
    subscription_active = False
    if _needs_subscription_check(post, viewer):
        store = store or get_subscription_store(viewer_id)
        subscription_active = store.check_subscription(getattr(post, "creator_id", None))
    return evaluate_access(post, viewer, subscription_active, strict=_strict())


def access_for_posts(posts, viewer_id) -> dict:
    """Access per post id; premium posts of other creators share one batched lookup."""
    store = get_subscription_store(viewer_id)
    viewers = {post.id: Viewer.for_post(viewer_id, post) for post in posts}

    store.prefetch({
        post.creator_id for post in posts
        if _needs_subscription_check(post, viewers[post.id])
    })

    return {post.id: access_for_post(post, viewer_id, store) for post in posts}
