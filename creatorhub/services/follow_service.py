from creatorhub.errors import NotFoundError
from creatorhub.repositories import user_repository
from creatorhub.repositories.follow_repository import create_follow, delete_follow, is_following


def _resolve_pair(follower_username: str, following_username: str):
    follower = user_repository.get_by_username(follower_username)
    target = user_repository.get_by_username(following_username)

    if not follower or not target:
        raise NotFoundError("User not found")
    return follower, target


def follow_by_username(follower_username: str, following_username: str) -> bool:
    follower, target = _resolve_pair(follower_username, following_username)
    if follower.id == target.id:
        raise ValueError("You cannot follow yourself")

    return create_follow(follower.id, target.id)


def unfollow_by_username(follower_username: str, following_username: str) -> bool:
    follower, target = _resolve_pair(follower_username, following_username)
    if follower.id == target.id:
        raise ValueError("You cannot unfollow yourself")

    return delete_follow(follower.id, target.id)


def is_user_following(follower_id, following_id) -> bool:
    if follower_id is None or follower_id == following_id:
        return False
    return is_following(follower_id, following_id)
