from flask import Blueprint, jsonify, request

from creatorhub.access.session import current_viewer_id
from creatorhub.schemas.user_schema import UserListItemSchema
from creatorhub.services import user_service


user_bp = Blueprint("users", __name__)


def _page_args():
    page = max(request.args.get("page", default=1, type=int), 1)
    size = min(max(request.args.get("size", default=20, type=int), 1), 100)
    return page, size


@user_bp.route("/creators", methods=["GET"])
def list_creators():
    page, size = _page_args()
    result = user_service.list_creators(page, size, current_viewer_id())
    result["content"] = UserListItemSchema(many=True).dump(result["content"])
    return jsonify(result), 200


@user_bp.route("/search", methods=["GET"])
def search_users():
    page, size = _page_args()
    try:
        result = user_service.search_users(request.args.get("q"), page, size, current_viewer_id())
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    result["content"] = UserListItemSchema(many=True).dump(result["content"])
    return jsonify(result), 200
