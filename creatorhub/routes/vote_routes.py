from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from creatorhub.access.session import current_user, current_viewer_id
from creatorhub.services import vote_service

vote_bp = Blueprint("votes", __name__)


@vote_bp.route("/votes", methods=["POST"])
@jwt_required()
def vote_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        state = vote_service.vote(
            current_user(),
            post_id=data.get("post_id"),
            value=data.get("value"),
        )
        return jsonify({"message": "Vote recorded", **state}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@vote_bp.route("/votes/post/<int:post_id>", methods=["DELETE"])
@jwt_required()
def remove_vote(post_id):
    state = vote_service.remove_vote(current_user(), post_id)
    return jsonify({"message": "Vote removed", **state}), 200


@vote_bp.route("/votes/post/<int:post_id>/count", methods=["GET"])
def vote_counts(post_id):
    return jsonify(vote_service.get_counts(current_viewer_id(), post_id)), 200
