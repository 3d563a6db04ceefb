from creatorhub.extensions.extensions import ma


class CommentAuthorSchema(ma.Schema):
    id = ma.Integer()
    username = ma.String()
    name = ma.String()


class CommentResponseSchema(ma.Schema):
    id = ma.Integer()
    post_id = ma.Integer()
    author = ma.Nested(CommentAuthorSchema)
    content = ma.String()
    created_at = ma.DateTime()
    updated_at = ma.DateTime()
