from sqlalchemy import func

from creatorhub.db import db
from creatorhub.models.comment_model import Comment


def create_comment(author_id, post_id, content):
    comment = Comment(
        author_id=author_id,
        post_id=post_id,
        content=content.strip(),
    )

    db.session.add(comment)
    return comment


def get_by_id(comment_id: int):
    return db.session.get(Comment, comment_id)


def get_comments_by_post(post_id: int, page: int, page_size: int):
    query = Comment.query.filter(Comment.post_id == post_id)
    total = query.count()
    comments = (
        query
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return comments, total


def count_by_posts(post_ids) -> dict:
    post_ids = set(post_ids)
    if not post_ids:
        return {}
    rows = (
        db.session.query(Comment.post_id, func.count(Comment.id))
        .filter(Comment.post_id.in_(post_ids))
        .group_by(Comment.post_id)
        .all()
    )
    return dict(rows)


def delete_comment(comment):
    db.session.delete(comment)
    db.session.commit()
