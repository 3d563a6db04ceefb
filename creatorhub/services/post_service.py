import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from creatorhub.access import MediaCursor, access_for_post, access_for_posts
from creatorhub.db import db
from creatorhub.errors import MediaStorageError, NotFoundError, PermissionDeniedError
from creatorhub.extensions.media_storage import MediaWriter, build_object_key, remove_objects
from creatorhub.models.media_model import MEDIA_TYPE_PHOTO, MEDIA_TYPE_VIDEO
from creatorhub.repositories import (
    comment_repository,
    follow_repository,
    post_repository,
    profile_repository,
    subscription_repository,
    user_repository,
    vote_repository,
)
from creatorhub.repositories.media_repository import add_media

logger = logging.getLogger(__name__)


ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
}

ALLOWED_VIDEO_MIME_TYPES = {
    "video/mp4",
    "video/quicktime",
}

MAX_MEDIA_FILES = 8
MAX_TITLE_LENGTH = 200

_EXTENSIONS = {
    "image/jpeg": "jpeg",
    "image/png": "png",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "video/quicktime": "mov",
}


def parse_bool(value, default=None, field="is_public"):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{field} must be a boolean")


def clamp_limit(limit: int) -> int:
    max_size = current_app.config.get("MAX_PAGE_SIZE", 50)
    return max(1, min(limit, max_size))


def _clean_optional_text(value, field: str, max_length: int | None = None):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    value = value.strip()
    if max_length and len(value) > max_length:
        raise ValueError(f"{field} must be at most {max_length} characters")
    return value or None


def media_url(post_id: int, media_id: int, thumbnail: bool = False) -> str:
    url = f"/api/posts/{post_id}/media/{media_id}"
    return f"{url}/thumbnail" if thumbnail else url


def _serialize_author(author_id, user_by_id: dict, profile_by_user_id: dict):
    user = user_by_id.get(author_id)
    profile = profile_by_user_id.get(author_id)

    username = user.username if user else f"user-{author_id}"
    return {
        "id": author_id,
        "username": username,
        "name": profile.name if profile else username,
    }


def _serialize_media(post, media, access) -> dict:
    payload = {
        "id": media.id,
        "media_type": media.media_type,
        "order_index": media.order_index,
    }
    if access.can_view_media:
        payload["media_url"] = media_url(post.id, media.id)
        payload["mime_type"] = media.mime_type
        payload["thumbnail_url"] = (
            media_url(post.id, media.id, thumbnail=True)
            if media.thumbnail_object_name
            else None
        )
    return payload


def serialize_post(post, access, user_by_id: dict, profile_by_user_id: dict,
                   vote_count=None, comment_count=None, user_vote=None) -> dict:
    text_visible = access.can_view_full_text
    counts_visible = access.can_interact
    return {
        "id": post.id,
        "creator_id": post.creator_id,
        "creator": _serialize_author(post.creator_id, user_by_id, profile_by_user_id),
        "is_public": bool(post.is_public),
        "locked": access.locked,
        "access": access.to_dict(),
        "title": post.title if text_visible else None,
        "description": post.description if text_visible else None,
        "created_at": post.created_at.isoformat(),
        "media_count": len(post.media),
        "media": [_serialize_media(post, media, access) for media in post.media],
        "vote_count": (vote_count or 0) if counts_visible else None,
        "comment_count": (comment_count or 0) if counts_visible else None,
        "user_vote": user_vote if counts_visible else None,
    }


def _serialize_page(posts, viewer_id):
    accesses = access_for_posts(posts, viewer_id)
    creator_ids = {post.creator_id for post in posts}
    user_by_id = user_repository.get_by_ids(creator_ids)
    profile_by_user_id = profile_repository.get_by_user_ids(creator_ids)

    # Counts are only fetched for posts whose counts are visible.
    open_ids = {post.id for post in posts if accesses[post.id].can_interact}
    scores = vote_repository.get_scores(open_ids)
    comment_counts = comment_repository.count_by_posts(open_ids)
    user_votes = vote_repository.get_user_votes(viewer_id, open_ids)

    return [
        serialize_post(
            post,
            accesses[post.id],
            user_by_id,
            profile_by_user_id,
            vote_count=scores.get(post.id, 0),
            comment_count=comment_counts.get(post.id, 0),
            user_vote=user_votes.get(post.id),
        )
        for post in posts
    ]


def _page_payload(posts, total, page, limit, viewer_id):
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "posts": _serialize_page(posts, viewer_id),
    }


def _validate_files(files, label="media"):
    validated = []
    for file in files:
        if not getattr(file, "filename", ""):
            raise ValueError(f"{label.capitalize()} file is required")

        mimetype = getattr(file, "mimetype", None) or ""
        if mimetype in ALLOWED_VIDEO_MIME_TYPES:
            media_type = MEDIA_TYPE_VIDEO
        elif mimetype in ALLOWED_IMAGE_MIME_TYPES:
            media_type = MEDIA_TYPE_PHOTO
        else:
            raise ValueError(f"Unsupported media type: {mimetype}")
        validated.append((file, mimetype, media_type))
    return validated


def create_post(creator, title, description, is_public, files=None, thumbnails=None):
    if creator is None:
        raise NotFoundError("User not found")
    if not creator.is_creator:
        raise PermissionDeniedError("Only creators can publish posts")

    title = _clean_optional_text(title, "title", MAX_TITLE_LENGTH)
    description = _clean_optional_text(description, "description")
    is_public = parse_bool(is_public, default=False)

    files = files or []
    thumbnails = thumbnails or []
    if len(files) > MAX_MEDIA_FILES:
        raise ValueError(f"Maximum {MAX_MEDIA_FILES} media files allowed")
    if len(thumbnails) > len(files):
        raise ValueError("More thumbnails than media files")
    if not files and not title and not description:
        raise ValueError("A post needs a title, a description or media")

    validated_files = _validate_files(files)
    validated_thumbnails = _validate_files(thumbnails, label="thumbnail")
    if any(media_type != MEDIA_TYPE_PHOTO for _, _, media_type in validated_thumbnails):
        raise ValueError("Thumbnails must be images")

    post = post_repository.create_post(creator.id, title, description, is_public)

    try:
        if validated_files:
            writer = MediaWriter()
            for order_index, (file, mimetype, media_type) in enumerate(validated_files):
                object_name = writer.write(
                    file, build_object_key(post.id, _EXTENSIONS[mimetype]), mimetype
                )
                thumbnail_object_name = thumbnail_mime_type = None
                if order_index < len(validated_thumbnails):
                    thumb, thumbnail_mime_type, _ = validated_thumbnails[order_index]
                    thumbnail_object_name = writer.write(
                        thumb,
                        build_object_key(post.id, _EXTENSIONS[thumbnail_mime_type], kind="thumbnails"),
                        thumbnail_mime_type,
                    )
                add_media(
                    post_id=post.id,
                    media_type=media_type,
                    object_name=object_name,
                    mime_type=mimetype,
                    order_index=order_index,
                    thumbnail_object_name=thumbnail_object_name,
                    thumbnail_mime_type=thumbnail_mime_type,
                )
        db.session.commit()
    except (MediaStorageError, SQLAlchemyError):
        db.session.rollback()
        raise

    logger.info("Post %s created by creator %s (public=%s)", post.id, creator.id, is_public)
    return {"post_id": post.id}


def get_post_or_404(post_id: int):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFoundError("Post not found")
    return post


def get_posts(page: int, limit: int, viewer_id=None):
    limit = clamp_limit(limit)
    posts, total = post_repository.list_posts(page, limit)
    return _page_payload(posts, total, page, limit, viewer_id)


def get_posts_by_username(username: str, page: int, limit: int, viewer_id=None):
    user = user_repository.get_by_username(username)
    if not user:
        raise NotFoundError("User not found")

    limit = clamp_limit(limit)
    posts, total = post_repository.list_by_creator(user.id, page, limit)
    return _page_payload(posts, total, page, limit, viewer_id)


def get_feed(viewer, page: int, limit: int):
    limit = clamp_limit(limit)
    creator_ids = set(follow_repository.get_following_ids(viewer.id))
    creator_ids.update(subscription_repository.get_active_creator_ids_for(viewer.id))
    posts, total = post_repository.list_feed(creator_ids, viewer.id, page, limit)
    return _page_payload(posts, total, page, limit, viewer.id)


def get_post_detail(post_id: int, viewer_id=None, media_index: int = 0):
    post = get_post_or_404(post_id)
    access = access_for_post(post, viewer_id)

    cursor = MediaCursor(post, enabled=access.can_view_media)
    cursor.move_to(media_index or 0)

    payload = _serialize_page([post], viewer_id)[0]
    payload["media_cursor"] = cursor.to_dict()
    return payload


def update_post(post_id: int, editor, data: dict):
    post = get_post_or_404(post_id)
    if editor is None or editor.id != post.creator_id:
        raise PermissionDeniedError("Only the creator can edit this post")
    if "is_public" in data:
        raise ValueError("Post visibility cannot be changed")
    if "title" not in data and "description" not in data:
        raise ValueError("At least one field is required")

    if "title" in data:
        post.title = _clean_optional_text(data["title"], "title", MAX_TITLE_LENGTH)
    if "description" in data:
        post.description = _clean_optional_text(data["description"], "description")
    if not post.media and not post.title and not post.description:
        db.session.rollback()
        raise ValueError("A post needs a title, a description or media")

    db.session.commit()
    return get_post_detail(post.id, editor.id)


def delete_post(post_id: int, editor):
    post = get_post_or_404(post_id)
    if editor is None or editor.id != post.creator_id:
        raise PermissionDeniedError("Only the creator can delete this post")
    object_names = [media.object_name for media in post.media]
    object_names += [media.thumbnail_object_name for media in post.media if media.thumbnail_object_name]

    post_repository.delete_post(post)
    remove_objects(object_names)
    logger.info("Post %s deleted by creator %s", post_id, editor.id)
