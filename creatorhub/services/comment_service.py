from creatorhub.access import access_for_post
from creatorhub.db import db
from creatorhub.errors import NotFoundError, PermissionDeniedError
from creatorhub.repositories import comment_repository, post_repository, profile_repository, user_repository

MAX_COMMENT_LENGTH = 2000


def _validate_content(content):
    if not isinstance(content, str) or not content.strip():
        raise ValueError("Comment content is required")
    if len(content.strip()) > MAX_COMMENT_LENGTH:
        raise ValueError(f"Comment must be at most {MAX_COMMENT_LENGTH} characters")
    return content.strip()


def _require_interactive_post(post_id: int, viewer_id):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFoundError("Post not found")
    if not access_for_post(post, viewer_id).can_interact:
        raise PermissionDeniedError("Subscribe to see and write comments on this post")
    return post


def _serialize_authors(comments):
    author_ids = {comment.author_id for comment in comments}
    return (
        user_repository.get_by_ids(author_ids),
        profile_repository.get_by_user_ids(author_ids),
    )


def serialize_comment(comment, user_by_id=None, profile_by_user_id=None):
    user_by_id = user_by_id or {}
    profile_by_user_id = profile_by_user_id or {}
    user = user_by_id.get(comment.author_id)
    profile = profile_by_user_id.get(comment.author_id)
    username = user.username if user else f"user-{comment.author_id}"

    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "author": {
            "id": comment.author_id,
            "username": username,
            "name": profile.name if profile else username,
        },
        "content": comment.content,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def add_comment(author, post_id: int, content):
    if author is None:
        raise NotFoundError("User not found")
    content = _validate_content(content)
    _require_interactive_post(post_id, author.id)

    comment = comment_repository.create_comment(
        author_id=author.id,
        post_id=post_id,
        content=content,
    )
    db.session.commit()
    return serialize_comment(comment, *_serialize_authors([comment]))


def get_post_comments(post_id: int, viewer_id, page: int, page_size: int):
    _require_interactive_post(post_id, viewer_id)
    comments, total = comment_repository.get_comments_by_post(post_id, page, page_size)
    user_by_id, profile_by_user_id = _serialize_authors(comments)
    return {
        "content": [serialize_comment(c, user_by_id, profile_by_user_id) for c in comments],
        "page": page,
        "size": page_size,
        "total": total,
    }


def _get_comment_or_404(comment_id: int):
    comment = comment_repository.get_by_id(comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    return comment


def update_comment(editor, comment_id: int, content):
    comment = _get_comment_or_404(comment_id)
    if editor is None or editor.id != comment.author_id:
        raise PermissionDeniedError("Only the author can edit this comment")
    content = _validate_content(content)
    # Losing access to the post also ends editing rights.
    _require_interactive_post(comment.post_id, editor.id)

    comment.content = content
    db.session.commit()
    return serialize_comment(comment, *_serialize_authors([comment]))


def delete_comment(editor, comment_id: int):
    comment = _get_comment_or_404(comment_id)
    post = post_repository.get_by_id(comment.post_id)
    allowed_ids = {comment.author_id, post.creator_id if post else None}
    if editor is None or editor.id not in allowed_ids:
        raise PermissionDeniedError("Only the author or the post creator can delete this comment")
    comment_repository.delete_comment(comment)
