from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from creatorhub.access.session import current_user, current_viewer_id
from creatorhub.schemas.comment_schema import CommentResponseSchema
from creatorhub.services import comment_service


comment_bp = Blueprint("comments", __name__)


def _content_from_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data.get("content")


@comment_bp.route("/posts/<int:post_id>/comments", methods=["POST"])
@jwt_required()
def create_comment(post_id):
    try:
        comment = comment_service.add_comment(current_user(), post_id, _content_from_body())
        return jsonify(CommentResponseSchema().dump(comment)), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@comment_bp.route("/posts/<int:post_id>/comments", methods=["GET"])
def list_comments(post_id):
    page = max(request.args.get("page", default=1, type=int), 1)
    page_size = min(max(request.args.get("page_size", default=20, type=int), 1), 100)

    result = comment_service.get_post_comments(post_id, current_viewer_id(), page, page_size)
    result["content"] = CommentResponseSchema(many=True).dump(result["content"])
    return jsonify(result), 200


@comment_bp.route("/comments/<int:comment_id>", methods=["PUT"])
@jwt_required()
def update_comment(comment_id):
    try:
        comment = comment_service.update_comment(current_user(), comment_id, _content_from_body())
        return jsonify(CommentResponseSchema().dump(comment)), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@comment_bp.route("/comments/<int:comment_id>", methods=["DELETE"])
@jwt_required()
def delete_comment(comment_id):
    comment_service.delete_comment(current_user(), comment_id)
    return jsonify({"message": "Comment deleted"}), 200
