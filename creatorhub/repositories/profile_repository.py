from creatorhub.db import db
from creatorhub.models.profile_model import Profile


def create_profile_for_user(user_id: int, name: str):
    profile = Profile(
        user_id=user_id,
        name=name,
        bio="",
    )
    db.session.add(profile)
    return profile


def get_by_user_id(user_id: int):
    return Profile.query.filter_by(user_id=user_id).first()


def get_by_user_ids(user_ids) -> dict:
    user_ids = set(user_ids)
    if not user_ids:
        return {}
    profiles = Profile.query.filter(Profile.user_id.in_(user_ids)).all()
    return {profile.user_id: profile for profile in profiles}
