# library_rental/errors.py
from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException


class LibraryError(Exception):
    kind = "error"
    status = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "error": self.kind, "message": self.message}


class NotFound(LibraryError):
    kind = "not_found"
    status = 404
    default_message = "Not found"


class BookNotFound(NotFound):
    default_message = "Book not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class RentalNotFound(NotFound):
    default_message = "Rental record not found or already returned"


class InvalidInput(LibraryError):
    kind = "invalid_input"
    status = 400
    default_message = "Invalid input"


class Conflict(LibraryError):
    kind = "conflict"
    status = 409
    default_message = "Conflict"


class AlreadyIssued(Conflict):
    default_message = "Book is already issued to this user"


class DuplicateEmail(Conflict):
    default_message = "Email is already registered"


class BookHasOpenRentals(Conflict):
    default_message = "Book has open rentals; returns must be completed first"


class InvalidTemporalOrder(LibraryError):
    kind = "invalid_temporal_order"
    status = 400
    default_message = "Invalid temporal order"


class InvalidReturnDate(InvalidTemporalOrder):
    default_message = "Return date cannot be before the issue date"


class StoreUnavailable(LibraryError):
    kind = "store_unavailable"
    status = 503
    default_message = "Storage is temporarily unavailable"


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    return "; ".join(parts) or "Invalid input"


def register_error_handlers(app):
    @app.errorhandler(LibraryError)
    def _library_error(e: LibraryError):
        if e.status >= 500:
            app.logger.error(f"[errors] {e.kind}: {e.message}")
        else:
            app.logger.warning(f"[errors] {e.kind}: {e.message}")
        return jsonify(e.to_dict()), e.status

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        err = InvalidInput(_validation_message(e))
        app.logger.warning(f"[errors] {err.kind}: {err.message}")
        return jsonify(err.to_dict()), err.status

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify({
            "success": False,
            "error": (e.name or "error").lower().replace(" ", "_"),
            "message": e.description,
        }), e.code

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # stack trace sadece log'a gider, client'a değil
        app.logger.exception(f"[errors] Beklenmeyen hata: {e}")
        return jsonify(LibraryError().to_dict()), 500
