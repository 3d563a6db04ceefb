from flask_jwt_extended import create_access_token, create_refresh_token
from werkzeug.security import check_password_hash, generate_password_hash

from creatorhub.models.user_model import ROLE_CREATOR, ROLE_USER
from creatorhub.repositories import user_repository


REGISTRABLE_ROLES = {
    "user": ROLE_USER,
    "creator": ROLE_CREATOR,
}

# Path segments that would shadow /profiles/<username>.
RESERVED_USERNAMES = {"me"}


def _require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def register(username, password, name=None, role="user"):
    if not _require_non_empty_string(username) or not _require_non_empty_string(password):
        raise ValueError("Missing fields")

    username = username.strip()
    if username.lower() in RESERVED_USERNAMES:
        raise ValueError("Username is reserved")
    resolved_name = username
    if name is not None:
        if not _require_non_empty_string(name):
            raise ValueError("Name must be a non-empty string")
        resolved_name = name.strip()

    resolved_role = REGISTRABLE_ROLES.get(str(role or "user").strip().lower())
    if resolved_role is None:
        raise ValueError("Role must be 'user' or 'creator'")

    if user_repository.get_by_username(username):
        raise ValueError("Username already exists")

    return user_repository.create_user(
        username=username,
        password_hash=generate_password_hash(password),
        role=resolved_role,
        name=resolved_name,
    )


def login(username, password):
    if not _require_non_empty_string(username) or not _require_non_empty_string(password):
        raise ValueError("Invalid credentials")

    username = username.strip()

    user = user_repository.get_by_username(username)
    if not user or not check_password_hash(user.password_hash, password):
        raise ValueError("Invalid credentials")

    return {
        "access_token": create_access_token(identity=username),
        "refresh_token": create_refresh_token(identity=username)
    }


def refresh_access_token(username):
    return {
        "access_token": create_access_token(identity=username)
    }
