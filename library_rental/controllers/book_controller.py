# library_rental/controllers/book_controller.py

from flask import Blueprint, current_app, jsonify, request

from library_rental.errors import InvalidInput
from library_rental.schemas import BookCreate, BookSearch, BookUpdate, RentRange
from library_rental.serializers import book_dict

book_bp = Blueprint("books", __name__, url_prefix="/books")


def _books():
    return current_app.extensions["library_catalog"]


def _reports():
    return current_app.extensions["rental_reports"]


@book_bp.get("/", strict_slashes=False)
def list_books():
    books = _books().list_books()
    return jsonify({"success": True, "data": [book_dict(b) for b in books]})


@book_bp.post("/", strict_slashes=False)
def create_book():
    payload = BookCreate.model_validate(request.get_json(silent=True) or {})
    b = _books().create_book(payload.model_dump())
    return jsonify({"success": True, "data": book_dict(b)}), 201


@book_bp.get("/search")
def search_books():
    q = BookSearch.model_validate(request.args.to_dict())
    books = _books().search(category=q.category, name=q.name, rent_range=q.rent_range)
    return jsonify({"success": True, "data": [book_dict(b) for b in books]})


@book_bp.get("/rent-range")
def books_by_rent_range():
    args = request.args.to_dict()
    if not args.get("minRent") or not args.get("maxRent"):
        raise InvalidInput("Please provide both minRent and maxRent values")
    q = RentRange.model_validate(args)
    books = _books().search(rent_range=(q.min_rent, q.max_rent))
    return jsonify({"success": True, "data": [book_dict(b) for b in books]})


@book_bp.get("/issuers")
def book_issuers_by_name():
    book_name = (request.args.get("bookName") or "").strip()
    if not book_name:
        raise InvalidInput("bookName is required")
    return jsonify({"success": True, "data": _reports().issuers_of_name(book_name)})


@book_bp.get("/rent")
def book_rent_by_name():
    book_name = (request.args.get("bookName") or "").strip()
    if not book_name:
        raise InvalidInput("bookName is required")
    return jsonify({"success": True, "data": _reports().total_rent_by_name(book_name)})


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    b = _books().get_book(book_id)
    return jsonify({"success": True, "data": book_dict(b)})


@book_bp.put("/<int:book_id>")
def update_book(book_id: int):
    payload = BookUpdate.model_validate(request.get_json(silent=True) or {})
    data = payload.model_dump(exclude_unset=True)
    if not data:
        raise InvalidInput("No fields to update")
    b = _books().update_book(book_id, data)
    return jsonify({"success": True, "data": book_dict(b)})


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    _books().delete_book(book_id)
    return jsonify({"success": True})


@book_bp.get("/<int:book_id>/issuers")
def book_issuers(book_id: int):
    return jsonify({"success": True, "data": _reports().issuers_of(book_id)})


@book_bp.get("/<int:book_id>/rent")
def book_rent(book_id: int):
    return jsonify({"success": True, "data": _reports().total_rent_generated(book_id)})
