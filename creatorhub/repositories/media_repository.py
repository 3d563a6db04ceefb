from creatorhub.db import db
from creatorhub.models.media_model import Media


def add_media(post_id, media_type, object_name, mime_type, order_index,
              thumbnail_object_name=None, thumbnail_mime_type=None):
    media = Media(
        post_id=post_id,
        media_type=media_type,
        object_name=object_name,
        mime_type=mime_type,
        order_index=order_index,
        thumbnail_object_name=thumbnail_object_name,
        thumbnail_mime_type=thumbnail_mime_type,
    )
    db.session.add(media)
    return media


def get_for_post(post_id: int, media_id: int):
    return Media.query.filter_by(id=media_id, post_id=post_id).first()
