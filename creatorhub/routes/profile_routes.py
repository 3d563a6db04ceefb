from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from creatorhub.access.session import current_viewer_id
from creatorhub.extensions.media_storage import open_object
from creatorhub.routes.media_routes import stored_object_response
from creatorhub.services import post_service, profile_service


profile_bp = Blueprint("profiles", __name__)


@profile_bp.route("/profiles/me", methods=["GET"])
@jwt_required()
def get_my_profile():
    return jsonify(
        profile_service.get_profile_by_username(get_jwt_identity(), current_viewer_id())
    ), 200


@profile_bp.route("/profiles/me", methods=["PUT"])
@jwt_required()
def update_my_profile():
    content_type = (request.content_type or "").lower()
    profile_image = None

    if "multipart/form-data" in content_type:
        data = request.form
        profile_image = request.files.get("profile_image") or request.files.get("avatar")
    else:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Invalid JSON body"}), 400

    try:
        profile = profile_service.update_profile(
            username=get_jwt_identity(),
            name=data.get("name"),
            bio=data.get("bio"),
            profile_image=profile_image,
        )
        return jsonify(profile), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@profile_bp.route("/profiles/<username>", methods=["GET"])
def get_profile(username):
    return jsonify(
        profile_service.get_profile_by_username(username, current_viewer_id())
    ), 200


@profile_bp.route("/profiles/<username>/image", methods=["GET", "HEAD"])
def get_profile_image(username):
    profile = profile_service.get_profile_image(username)
    stored = open_object(profile.image_object_name, profile.image_mime_type)
    return stored_object_response(stored, is_public=True)


@profile_bp.route("/profiles/<username>/posts", methods=["GET"])
def get_profile_posts(username):
    page = max(request.args.get("page", default=1, type=int), 1)
    limit = request.args.get("limit", default=10, type=int)

    data = post_service.get_posts_by_username(username, page, limit, current_viewer_id())
    return jsonify(data), 200
