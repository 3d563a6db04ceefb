from sqlalchemy.exc import IntegrityError

from creatorhub.access import access_for_post
from creatorhub.db import db
from creatorhub.errors import NotFoundError, PermissionDeniedError
from creatorhub.repositories import post_repository, vote_repository


def _require_interactive_post(post_id, voter):
    if voter is None:
        raise NotFoundError("User not found")
    if isinstance(post_id, bool) or not isinstance(post_id, int):
        raise ValueError("Invalid post id")

    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFoundError("Post not found")
    if not access_for_post(post, voter.id).can_interact:
        raise PermissionDeniedError("Subscribe to interact with this post")
    return post


def _vote_state(post_id: int, voter_id: int) -> dict:
    vote = vote_repository.get_vote(voter_id, post_id)
    return {
        "post_id": post_id,
        "vote_count": vote_repository.get_score(post_id),
        "user_vote": vote.value if vote else None,
    }


def vote(voter, post_id, value) -> dict:
    """Record the vote and return the committed count and the viewer's vote."""
    if isinstance(value, bool) or value not in (1, -1):
        raise ValueError("Invalid vote value")
    _require_interactive_post(post_id, voter)

    try:
        vote_repository.upsert_vote(user_id=voter.id, post_id=post_id, value=value)
    except IntegrityError:
        # Concurrent first vote from the same user; the other write won.
        db.session.rollback()

    return _vote_state(post_id, voter.id)


def remove_vote(voter, post_id) -> dict:
    _require_interactive_post(post_id, voter)
    vote_repository.delete_vote(voter.id, post_id)
    return _vote_state(post_id, voter.id)


def get_counts(viewer_id, post_id: int) -> dict:
    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFoundError("Post not found")
    if not access_for_post(post, viewer_id).can_interact:
        raise PermissionDeniedError("Subscribe to see votes on this post")
    return vote_repository.get_counts(post_id)
