from flask import Blueprint, current_app, jsonify, request

from library_rental.schemas import UserCreate
from library_rental.serializers import user_dict

user_bp = Blueprint("users", __name__, url_prefix="/users")


def _users():
    return current_app.extensions["library_users"]


@user_bp.get("/", strict_slashes=False)
def list_users():
    users = _users().list_users()
    return jsonify({"success": True, "data": [user_dict(u) for u in users]})


@user_bp.post("/", strict_slashes=False)
def create_user():
    payload = UserCreate.model_validate(request.get_json(silent=True) or {})
    u = _users().create_user(payload.model_dump())
    return jsonify({"success": True, "data": user_dict(u)}), 201


@user_bp.get("/<int:user_id>")
def get_user(user_id: int):
    u = _users().get_user(user_id)
    return jsonify({"success": True, "data": user_dict(u)})


@user_bp.get("/<int:user_id>/rentals")
def user_rentals(user_id: int):
    # kiralama yoksa boş liste (404 değil)
    rows = current_app.extensions["rental_reports"].rentals_for_user(user_id)
    return jsonify({"success": True, "data": rows})
