from creatorhub.access import get_subscription_store
from creatorhub.repositories import profile_repository, user_repository
from creatorhub.services.profile_service import profile_image_url


def _serialize_users(users, viewer_id=None):
    profiles = profile_repository.get_by_user_ids({user.id for user in users})
    # One batched lookup for the whole page instead of a check per creator.
    subscribed = get_subscription_store(viewer_id).prefetch(
        [user.id for user in users if user.is_creator and user.id != viewer_id]
    )

    result = []
    for user in users:
        profile = profiles.get(user.id)
        result.append({
            "id": user.id,
            "username": user.username,
            "role": user.role,
            "name": profile.name if profile else user.username,
            "bio": profile.bio if profile else "",
            "profile_image_url": profile_image_url(user.username, profile),
            "is_subscribed": subscribed.get(user.id, False),
        })
    return result


def list_creators(page: int, size: int, viewer_id=None):
    users, total = user_repository.list_creators(page, size)
    return {
        "content": _serialize_users(users, viewer_id),
        "page": page,
        "size": size,
        "total": total,
    }


def search_users(query, page: int, size: int, viewer_id=None):
    if not isinstance(query, str) or not query.strip():
        raise ValueError("Search query is required")
    users, total = user_repository.search(query.strip(), page, size)
    return {
        "content": _serialize_users(users, viewer_id),
        "page": page,
        "size": size,
        "total": total,
    }
