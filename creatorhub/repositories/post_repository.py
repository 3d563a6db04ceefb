from sqlalchemy import or_
from sqlalchemy.orm import joinedload

from creatorhub.db import db
from creatorhub.models.post_model import Post


def create_post(creator_id, title, description, is_public):
    post = Post(
        creator_id=creator_id,
        title=title,
        description=description,
        is_public=bool(is_public),
    )
    db.session.add(post)
    db.session.flush()

    return post


def get_by_id(post_id: int):
    return (
        Post.query
        .options(joinedload(Post.media))
        .filter(Post.id == post_id)
        .first()
    )


def _paginate(query, page: int, limit: int):
    total = query.count()
    posts = (
        query
        .options(joinedload(Post.media))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return posts, total


def list_posts(page: int, limit: int):
    return _paginate(Post.query, page, limit)


def list_by_creator(creator_id: int, page: int, limit: int):
    return _paginate(Post.query.filter(Post.creator_id == creator_id), page, limit)


def list_feed(creator_ids, viewer_id: int, page: int, limit: int):
    creator_ids = set(creator_ids)
    query = Post.query.filter(
        or_(Post.creator_id.in_(creator_ids), Post.creator_id == viewer_id)
        if creator_ids
        else Post.creator_id == viewer_id
    )
    return _paginate(query, page, limit)


def count_by_creator(creator_id: int) -> int:
    return Post.query.filter_by(creator_id=creator_id).count()


def delete_post(post):
    db.session.delete(post)
    db.session.commit()
