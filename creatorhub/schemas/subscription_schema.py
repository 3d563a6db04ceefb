from creatorhub.extensions.extensions import ma
from creatorhub.schemas.user_schema import UserSummarySchema


class SubscriptionSchema(ma.Schema):
    id = ma.Integer()
    subscriber = ma.Nested(UserSummarySchema, allow_none=True)
    creator = ma.Nested(UserSummarySchema, allow_none=True)
    start_date = ma.DateTime()
    end_date = ma.DateTime()
    is_active = ma.Boolean()
