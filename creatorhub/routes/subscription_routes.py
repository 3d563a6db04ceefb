from flask import Blueprint, request, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required

from creatorhub.schemas.subscription_schema import SubscriptionSchema
from creatorhub.services import subscription_service
from creatorhub.services.post_service import parse_bool


subscription_bp = Blueprint("subscriptions", __name__)


def _list_args():
    page = max(request.args.get("page", default=1, type=int), 1)
    size = min(max(request.args.get("size", default=20, type=int), 1), 100)
    active_only = parse_bool(request.args.get("active"), default=False, field="active")
    return page, size, active_only


def _dump_page(result):
    result["content"] = SubscriptionSchema(many=True).dump(result["content"])
    return result


@subscription_bp.route("", methods=["POST"])
@jwt_required()
def subscribe():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        subscription, created = subscription_service.subscribe(
            get_jwt_identity(), data.get("creator")
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "message": "Subscribed" if created else "Already subscribed",
        "id": subscription.id,
        "start_date": subscription.start_date.isoformat(),
        "end_date": subscription.end_date.isoformat(),
        "active": subscription.is_active,
    }), 201 if created else 200


@subscription_bp.route("/creator/<username>", methods=["DELETE"])
@jwt_required()
def unsubscribe(username):
    try:
        removed = subscription_service.unsubscribe(get_jwt_identity(), username)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(
        {"message": "Unsubscribed"} if removed else {"message": "Not subscribed"}
    ), 200


@subscription_bp.route("/my", methods=["GET"])
@jwt_required()
def my_subscriptions():
    try:
        page, size, active_only = _list_args()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    result = subscription_service.get_my_subscriptions(get_jwt_identity(), page, size, active_only)
    return jsonify(_dump_page(result)), 200


@subscription_bp.route("/creator", methods=["GET"])
@jwt_required()
def creator_subscribers():
    try:
        page, size, active_only = _list_args()
        result = subscription_service.get_creator_subscribers(
            get_jwt_identity(), page, size, active_only
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(_dump_page(result)), 200


@subscription_bp.route("/check/<username>", methods=["GET"])
@jwt_required()
def check_subscription(username):
    return jsonify(subscription_service.check(get_jwt_identity(), username)), 200
