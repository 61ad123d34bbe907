from decimal import Decimal
from library_rental.utils.dates import isoformat

UNKNOWN_BOOK = "Unknown Book"
UNKNOWN_USER = "Unknown User"


def money(value) -> float:
    if value is None:
        return 0.0
    return float(value if isinstance(value, Decimal) else Decimal(str(value)))


def address_dict(u) -> dict:
    return {
        "street": u.street,
        "city": u.city,
        "state": u.state,
        "zip": u.zip_code,
    }


def book_dict(b) -> dict:
    return {
        "id": b.id,
        "bookName": b.book_name,
        "category": b.category,
        "rentPerDay": money(b.rent_per_day),
        "author": b.author,
        "publishedDate": isoformat(b.published_date),
        "isbn": b.isbn,
        "availableCopies": b.available_copies,
        "description": b.description,
        "addedDate": isoformat(b.added_date),
    }


def user_dict(u) -> dict:
    return {
        "id": u.id,
        "username": u.username,
        "email": u.email,
        "phoneNumber": u.phone_number,
        "address": address_dict(u),
        "createdAt": isoformat(u.created_at),
        "updatedAt": isoformat(u.updated_at),
    }


def rental_dict(r) -> dict:
    return {
        "id": r.id,
        "bookId": r.book_id,
        "userId": r.user_id,
        "issueDate": isoformat(r.issue_date),
        "returnDate": isoformat(r.return_date),
        "totalRent": money(r.total_rent),
        "status": "issued" if r.return_date is None else "returned",
    }
