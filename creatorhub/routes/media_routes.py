from datetime import timezone

from flask import Blueprint, Response, current_app, jsonify, request, stream_with_context
from werkzeug.http import http_date

from creatorhub.access import access_for_post
from creatorhub.access.session import current_viewer_id
from creatorhub.errors import NotFoundError
from creatorhub.extensions.media_storage import open_object
from creatorhub.repositories import media_repository
from creatorhub.services.post_service import get_post_or_404

media_bp = Blueprint("media", __name__)


def _quoted_etag(value) -> str | None:
    value = str(value or "").strip().strip('"')
    return f'"{value}"' if value else None


def _etag_matches(if_none_match: str | None, etag: str | None) -> bool:
    if not if_none_match or not etag:
        return False
    candidates = {part.strip().strip('"') for part in if_none_match.split(",") if part.strip()}
    return "*" in candidates or etag.strip('"') in candidates


def _headers(stored, is_public: bool) -> dict:
    max_age = max(int(current_app.config.get("MEDIA_CACHE_MAX_AGE_SECONDS", 0)), 0)
    # Premium bytes must not be kept by shared caches.
    scope = "public" if is_public else "private"
    headers = {
        "Cache-Control": f"{scope}, max-age={max_age}",
        "Content-Type": stored.content_type,
        "Vary": "Authorization",
    }
    if stored.size is not None:
        headers["Content-Length"] = str(stored.size)
    etag = _quoted_etag(stored.etag)
    if etag:
        headers["ETag"] = etag
    last_modified = stored.last_modified
    if last_modified is not None and hasattr(last_modified, "timestamp"):
        if last_modified.tzinfo is None:
            last_modified = last_modified.replace(tzinfo=timezone.utc)
        headers["Last-Modified"] = http_date(last_modified.timestamp())
    return headers


def _serve(post_id: int, media_id: int, thumbnail: bool):
    post = get_post_or_404(post_id)
    media = media_repository.get_for_post(post_id, media_id)
    if media is None:
        raise NotFoundError("Media not found")

    if not access_for_post(post, current_viewer_id()).can_view_media:
        return jsonify({"error": "Subscribe to view this media"}), 403

    if thumbnail:
        if not media.thumbnail_object_name:
            raise NotFoundError("Thumbnail not found")
        stored = open_object(media.thumbnail_object_name, media.thumbnail_mime_type)
    else:
        stored = open_object(media.object_name, media.mime_type)

    return stored_object_response(stored, bool(post.is_public))


def stored_object_response(stored, is_public: bool):
    """Stream ``stored`` with cache headers; honours If-None-Match and HEAD."""
    headers = _headers(stored, is_public)
    if _etag_matches(request.headers.get("If-None-Match"), headers.get("ETag")):
        return Response(status=304, headers=headers)
    if request.method == "HEAD":
        return Response(status=200, headers=headers)

    chunk_size = max(int(current_app.config.get("MEDIA_STREAM_CHUNK_SIZE", 256 * 1024)), 1024)
    return Response(
        stream_with_context(stored.iter_chunks(chunk_size)),
        status=200,
        headers=headers,
        direct_passthrough=True,
    )


@media_bp.route("/posts/<int:post_id>/media/<int:media_id>", methods=["GET", "HEAD"])
def get_media(post_id, media_id):
    return _serve(post_id, media_id, thumbnail=False)


@media_bp.route("/posts/<int:post_id>/media/<int:media_id>/thumbnail", methods=["GET", "HEAD"])
def get_media_thumbnail(post_id, media_id):
    return _serve(post_id, media_id, thumbnail=True)
