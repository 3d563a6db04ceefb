from creatorhub.db import db, utcnow


MEDIA_TYPE_PHOTO = "photo"
MEDIA_TYPE_VIDEO = "video"


class Media(db.Model):
    __tablename__ = "media"

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False
    )
    media_type = db.Column(db.String(10), nullable=False)  # "photo" | "video"
    object_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(50), nullable=False)
    thumbnail_object_name = db.Column(db.String(255), nullable=True)
    thumbnail_mime_type = db.Column(db.String(50), nullable=True)
    order_index = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    __table_args__ = (
        db.UniqueConstraint("post_id", "order_index", name="unique_media_order"),
    )
