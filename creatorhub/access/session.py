from flask import g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from creatorhub.repositories import user_repository


def current_user():
    """Viewer behind the request's access token, or None when anonymous.

    Routes that allow anonymous viewers call this; an invalid or expired
    token on such a route still fails through flask-jwt-extended.
    """
    if "current_user" in g:
        return g.current_user

    verify_jwt_in_request(optional=True)
    username = get_jwt_identity()
    user = user_repository.get_by_username(username) if username else None
    g.current_user = user
    return user


def current_viewer_id():
    user = current_user()
    return user.id if user else None
