from creatorhub.db import db, utcnow


ROLE_USER = "USER"
ROLE_CREATOR = "CREATOR"
ROLE_ADMIN = "ADMIN"
ROLES = (ROLE_USER, ROLE_CREATOR, ROLE_ADMIN)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    @property
    def is_creator(self) -> bool:
        return self.role == ROLE_CREATOR
