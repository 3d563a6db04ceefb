from creatorhub.db import db, utcnow


class Subscription(db.Model):
    __tablename__ = "subscriptions"

    id = db.Column(db.Integer, primary_key=True)
    subscriber_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    creator_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    start_date = db.Column(db.DateTime, default=utcnow, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)

    __table_args__ = (
        db.Index("ix_subscription_pair", "subscriber_id", "creator_id"),
    )

    @property
    def is_active(self) -> bool:
        return utcnow() < self.end_date
