from creatorhub.db import db
from creatorhub.models.follow_model import Follow


def is_following(follower_id: int, following_id: int) -> bool:
    return (
        Follow.query.filter_by(
            follower_id=follower_id,
            following_id=following_id,
        ).first()
        is not None
    )


def create_follow(follower_id: int, following_id: int) -> bool:
    if is_following(follower_id, following_id):
        return False

    db.session.add(Follow(follower_id=follower_id, following_id=following_id))
    db.session.commit()
    return True


def delete_follow(follower_id: int, following_id: int) -> bool:
    follow = Follow.query.filter_by(
        follower_id=follower_id,
        following_id=following_id,
    ).first()
    if not follow:
        return False

    db.session.delete(follow)
    db.session.commit()
    return True


def count_followers(user_id: int) -> int:
    return Follow.query.filter_by(following_id=user_id).count()


def count_following(user_id: int) -> int:
    return Follow.query.filter_by(follower_id=user_id).count()


def get_following_ids(follower_id: int) -> list[int]:
    rows = (
        db.session.query(Follow.following_id)
        .filter(Follow.follower_id == follower_id)
        .all()
    )
    return [row[0] for row in rows]
