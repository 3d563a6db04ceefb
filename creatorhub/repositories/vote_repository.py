from sqlalchemy import case, func

from creatorhub.db import db
from creatorhub.models.post_model import Post
from creatorhub.models.vote_model import Vote


def get_vote(user_id: int, post_id: int):
    return Vote.query.filter_by(user_id=user_id, post_id=post_id).first()


def upsert_vote(user_id: int, post_id: int, value: int) -> bool:
    """Return False when the same vote already exists."""
    vote = get_vote(user_id, post_id)

    if vote:
        if vote.value == value:
            return False
        vote.value = value
    else:
        db.session.add(Vote(user_id=user_id, post_id=post_id, value=value))

    db.session.commit()
    return True


def delete_vote(user_id: int, post_id: int) -> bool:
    vote = get_vote(user_id, post_id)
    if not vote:
        return False

    db.session.delete(vote)
    db.session.commit()
    return True


def get_score(post_id: int) -> int:
    score = (
        db.session.query(func.coalesce(func.sum(Vote.value), 0))
        .filter(Vote.post_id == post_id)
        .scalar()
    )
    return int(score or 0)


def get_counts(post_id: int) -> dict:
    upvotes, downvotes = (
        db.session.query(
            func.coalesce(func.sum(case((Vote.value > 0, 1), else_=0)), 0),
            func.coalesce(func.sum(case((Vote.value < 0, 1), else_=0)), 0),
        )
        .filter(Vote.post_id == post_id)
        .one()
    )
    return {"upvotes": int(upvotes), "downvotes": int(downvotes)}


def get_scores(post_ids) -> dict:
    post_ids = set(post_ids)
    if not post_ids:
        return {}
    rows = (
        db.session.query(Vote.post_id, func.sum(Vote.value))
        .filter(Vote.post_id.in_(post_ids))
        .group_by(Vote.post_id)
        .all()
    )
    return {post_id: int(score or 0) for post_id, score in rows}


def get_user_votes(user_id: int, post_ids) -> dict:
    post_ids = set(post_ids)
    if user_id is None or not post_ids:
        return {}
    rows = (
        db.session.query(Vote.post_id, Vote.value)
        .filter(Vote.user_id == user_id, Vote.post_id.in_(post_ids))
        .all()
    )
    return dict(rows)


def count_likes_received(creator_id: int) -> int:
    return (
        db.session.query(func.count(Vote.id))
        .join(Post, Post.id == Vote.post_id)
        .filter(Post.creator_id == creator_id, Vote.value > 0)
        .scalar()
    ) or 0
