from creatorhub.extensions.extensions import ma


class UserSummarySchema(ma.Schema):
    id = ma.Integer()
    username = ma.String()
    role = ma.String()


class UserListItemSchema(UserSummarySchema):
    name = ma.String()
    bio = ma.String()
    profile_image_url = ma.String(allow_none=True)
    is_subscribed = ma.Boolean()
