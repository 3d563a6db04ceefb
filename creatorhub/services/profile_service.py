from sqlalchemy.exc import SQLAlchemyError

from creatorhub.access import get_subscription_store
from creatorhub.db import db
from creatorhub.errors import NotFoundError
from creatorhub.extensions.media_storage import MediaWriter, build_profile_image_key, remove_objects
from creatorhub.repositories import post_repository, subscription_repository, user_repository, vote_repository
from creatorhub.repositories.follow_repository import count_followers, count_following
from creatorhub.repositories.profile_repository import create_profile_for_user, get_by_user_id
from creatorhub.services import follow_service


ALLOWED_PROFILE_IMAGE_MIME_TYPES = {
    "image/jpeg": "jpeg",
    "image/png": "png",
    "image/webp": "webp",
}


def profile_image_url(username: str, profile) -> str | None:
    if profile is None or not profile.image_object_name:
        return None
    return f"/api/profiles/{username}/image"


def _get_or_create_profile(user):
    profile = get_by_user_id(user.id)
    if profile:
        return profile

    profile = create_profile_for_user(user.id, user.username)
    db.session.commit()
    return profile


def get_user_stats(user) -> dict:
    return {
        "followers_count": count_followers(user.id),
        "following_count": count_following(user.id),
        "likes_count": vote_repository.count_likes_received(user.id),
        "posts_count": post_repository.count_by_creator(user.id),
        "subscribers_count": (
            subscription_repository.count_active_subscribers(user.id)
            if user.is_creator
            else 0
        ),
    }


def _serialize_profile(user, profile, viewer_id=None):
    payload = {
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "name": profile.name,
        "bio": profile.bio,
        "profile_image_url": profile_image_url(user.username, profile),
        "created_at": user.created_at.isoformat(),
    }
    payload.update(get_user_stats(user))

    # Following and subscribing are tracked independently.
    payload["is_following"] = follow_service.is_user_following(viewer_id, user.id)
    payload["is_subscribed"] = (
        viewer_id is not None
        and viewer_id != user.id
        and get_subscription_store(viewer_id).check_subscription(user.id)
    )
    return payload


def get_profile_by_username(username: str, viewer_id=None):
    user = user_repository.get_by_username(username)
    if not user:
        raise NotFoundError("User not found")

    profile = _get_or_create_profile(user)
    return _serialize_profile(user, profile, viewer_id)


def get_profile_image(username: str):
    user = user_repository.get_by_username(username)
    if not user:
        raise NotFoundError("User not found")
    profile = get_by_user_id(user.id)
    if profile is None or not profile.image_object_name:
        raise NotFoundError("Profile image not found")
    return profile


def _validate_profile_image(profile_image):
    if not getattr(profile_image, "filename", ""):
        raise ValueError("Profile image file is required")
    mimetype = getattr(profile_image, "mimetype", None) or ""
    if mimetype not in ALLOWED_PROFILE_IMAGE_MIME_TYPES:
        raise ValueError(f"Unsupported media type: {mimetype}")
    return mimetype


def update_profile(username: str, name=None, bio=None, profile_image=None):
    user = user_repository.get_by_username(username)
    if not user:
        raise NotFoundError("User not found")

    if name is None and bio is None and profile_image is None:
        raise ValueError("At least one field is required")

    if name is not None and (not isinstance(name, str) or not name.strip()):
        raise ValueError("Name must be a non-empty string")
    if bio is not None and not isinstance(bio, str):
        raise ValueError("Bio must be a string")
    mimetype = _validate_profile_image(profile_image) if profile_image is not None else None

    profile = _get_or_create_profile(user)
    previous_image = profile.image_object_name

    if profile_image is not None:
        object_name = MediaWriter().write(
            profile_image,
            build_profile_image_key(user.id, ALLOWED_PROFILE_IMAGE_MIME_TYPES[mimetype]),
            mimetype,
        )
        profile.image_object_name = object_name
        profile.image_mime_type = mimetype

    if name is not None:
        profile.name = name.strip()
    if bio is not None:
        profile.bio = bio.strip()

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    if profile_image is not None and previous_image:
        remove_objects([previous_image])
    return _serialize_profile(user, profile, user.id)
