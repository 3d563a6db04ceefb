from creatorhub.db import db
from creatorhub.models.user_model import ROLE_CREATOR, User
from creatorhub.repositories.profile_repository import create_profile_for_user


def get_by_username(username: str):
    return User.query.filter_by(username=username).first()


def get_by_id(user_id: int):
    return db.session.get(User, user_id)


def get_by_ids(user_ids) -> dict:
    user_ids = set(user_ids)
    if not user_ids:
        return {}
    return {user.id: user for user in User.query.filter(User.id.in_(user_ids)).all()}


def create_user(username, password_hash, role, name=None):
    user = User(
        username=username,
        password_hash=password_hash,
        role=role,
    )
    db.session.add(user)
    db.session.flush()

    create_profile_for_user(
        user_id=user.id,
        name=(name or username).strip(),
    )

    db.session.commit()
    return user


def list_creators(page: int, size: int):
    query = User.query.filter(User.role == ROLE_CREATOR).order_by(User.username.asc())
    total = query.count()
    return query.offset((page - 1) * size).limit(size).all(), total


def search(term: str, page: int, size: int):
    pattern = f"%{term}%"
    query = (
        User.query
        .filter(User.username.ilike(pattern))
        .order_by(User.username.asc())
    )
    total = query.count()
    return query.offset((page - 1) * size).limit(size).all(), total
