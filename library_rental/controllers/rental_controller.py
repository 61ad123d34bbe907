from flask import Blueprint, current_app, jsonify, request

from library_rental.schemas import DateRangeQuery, IssueRequest, ReturnRequest
from library_rental.serializers import rental_dict

rental_bp = Blueprint("rentals", __name__, url_prefix="/rentals")


def _ledger():
    return current_app.extensions["rental_ledger"]


@rental_bp.post("/", strict_slashes=False)
def issue_rental():
    payload = IssueRequest.model_validate(request.get_json(silent=True) or {})
    r = _ledger().issue(payload.book_id, payload.user_id, payload.issue_date)
    return jsonify({"success": True, "message": "Book issued successfully", "data": rental_dict(r)}), 201


@rental_bp.post("/return")
def return_rental():
    payload = ReturnRequest.model_validate(request.get_json(silent=True) or {})
    r = _ledger().return_rental(payload.book_id, payload.user_id, payload.return_date)
    return jsonify({"success": True, "message": "Book returned successfully", "data": rental_dict(r)})


@rental_bp.get("/", strict_slashes=False)
def list_rentals():
    args = request.args.to_dict()
    if "start" in args or "end" in args:
        q = DateRangeQuery.model_validate(args)
        rows = current_app.extensions["rental_reports"].rentals_issued_between(q.start, q.end)
        return jsonify({"success": True, "data": rows})

    rentals = _ledger().list_all()
    return jsonify({"success": True, "data": [rental_dict(r) for r in rentals]})


@rental_bp.get("/<int:rental_id>")
def get_rental(rental_id: int):
    r = _ledger().get(rental_id)
    return jsonify({"success": True, "data": rental_dict(r)})
