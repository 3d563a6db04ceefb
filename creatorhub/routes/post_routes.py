from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from creatorhub.access.session import current_user, current_viewer_id
from creatorhub.services import post_service

post_bp = Blueprint("posts", __name__)


def _page_args():
    page = max(request.args.get("page", default=1, type=int), 1)
    limit = request.args.get("limit", default=10, type=int)
    return page, limit


@post_bp.route("/posts", methods=["POST"])
@jwt_required()
def create_post():
    content_type = (request.content_type or "").lower()
    files = []
    thumbnails = []

    if "multipart/form-data" in content_type:
        fields = request.form
        files = request.files.getlist("media") or request.files.getlist("media[]")
        thumbnails = request.files.getlist("thumbnails") or request.files.getlist("thumbnails[]")
    else:
        fields = request.get_json(silent=True)
        if not isinstance(fields, dict):
            return jsonify({"error": "Invalid JSON body"}), 400

    try:
        result = post_service.create_post(
            current_user(),
            title=fields.get("title"),
            description=fields.get("description"),
            is_public=fields.get("is_public"),
            files=files,
            thumbnails=thumbnails,
        )
        return jsonify({
            "message": "Post created successfully",
            "post_id": result["post_id"]
        }), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@post_bp.route("/posts", methods=["GET"])
def list_posts():
    page, limit = _page_args()
    return jsonify(post_service.get_posts(page, limit, current_viewer_id())), 200


@post_bp.route("/posts/feed", methods=["GET"])
@jwt_required()
def feed():
    page, limit = _page_args()
    viewer = current_user()
    if viewer is None:
        return jsonify({"error": "User not found"}), 404
    return jsonify(post_service.get_feed(viewer, page, limit)), 200


@post_bp.route("/posts/<int:post_id>", methods=["GET"])
def get_post(post_id):
    media_index = request.args.get("media_index", default=0, type=int)
    return jsonify(
        post_service.get_post_detail(post_id, current_viewer_id(), media_index)
    ), 200


@post_bp.route("/posts/<int:post_id>", methods=["PUT", "PATCH"])
@jwt_required()
def update_post(post_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        return jsonify(post_service.update_post(post_id, current_user(), data)), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@post_bp.route("/posts/<int:post_id>", methods=["DELETE"])
@jwt_required()
def delete_post(post_id):
    post_service.delete_post(post_id, current_user())
    return jsonify({"message": "Post deleted"}), 200
