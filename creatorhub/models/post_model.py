from creatorhub.db import db, utcnow


class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    creator_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(200), nullable=True)
    description = db.Column(db.Text, nullable=True)
    # Set once at creation; premium by default.
    is_public = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    media = db.relationship(
        "Media",
        backref="post",
        lazy="select",
        order_by="Media.order_index",
        cascade="all, delete-orphan",
    )
    comments = db.relationship(
        "Comment",
        backref="post",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )
    votes = db.relationship(
        "Vote",
        backref="post",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )
