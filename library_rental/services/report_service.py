from decimal import Decimal

from flask import current_app

from library_rental.errors import BookNotFound, InvalidTemporalOrder, UserNotFound
from library_rental.serializers import UNKNOWN_BOOK, UNKNOWN_USER, book_dict, money, rental_dict
from library_rental.services.rent import compute_rent, compute_rental_days
from library_rental.utils.dates import isoformat, utcnow


class RentalReports:
    """Ledger üzerinde salt-okunur görünümler; hiçbir şeyi değiştirmez."""

    def __init__(self, rentals, books, users, clock=utcnow):
        self.rentals = rentals
        self.books = books
        self.users = users
        self.clock = clock

    @staticmethod
    def _issuer(rental, user) -> dict:
        return {
            "rentalId": rental.id,
            "userId": rental.user_id,
            "username": user.username if user else UNKNOWN_USER,
            "email": user.email if user else None,
            "issueDate": isoformat(rental.issue_date),
            "returnDate": isoformat(rental.return_date),
        }

    def _book_or_404(self, book_id: int):
        book = self.books.get(book_id)
        if not book:
            raise BookNotFound()
        return book

    def issuers_of(self, book_id: int) -> dict:
        book = self._book_or_404(book_id)
        return self._issuers_report(book)

    def _book_by_name_or_404(self, book_name: str):
        book = self.books.find_by_name(book_name, case_insensitive=True)
        if not book:
            raise BookNotFound()
        return book

    def issuers_of_name(self, book_name: str) -> dict:
        return self._issuers_report(self._book_by_name_or_404(book_name))

    def _issuers_report(self, book) -> dict:
        rentals = self.rentals.list_by_book(book.id)
        users = self.users.get_many(r.user_id for r in rentals)

        open_rentals = [r for r in rentals if r.is_open]
        returned = [r for r in rentals if not r.is_open]

        current = open_rentals[-1] if open_rentals else None
        return {
            "bookId": book.id,
            "bookName": book.book_name,
            "totalIssuedCount": len(rentals),
            "currentIssuer": self._issuer(current, users.get(current.user_id)) if current else None,
            "currentIssuers": [self._issuer(r, users.get(r.user_id)) for r in open_rentals],
            "pastIssuers": [self._issuer(r, users.get(r.user_id)) for r in returned],
        }

    def total_rent_generated(self, book_id: int) -> dict:
        return self._rent_report(self._book_or_404(book_id))

    def total_rent_by_name(self, book_name: str) -> dict:
        return self._rent_report(self._book_by_name_or_404(book_name))

    def _rent_report(self, book) -> dict:
        rentals = self.rentals.list_by_book(book.id)
        now = self.clock()

        settled = Decimal("0.00")
        estimated = Decimal("0.00")
        open_count = 0
        for r in rentals:
            if r.return_date is not None:
                settled += Decimal(str(r.total_rent or 0))
                continue
            # açık kiralama: bugüne kadarki tahmini tutar, kaydedilmez
            open_count += 1
            as_of = now if now >= r.issue_date else r.issue_date
            days = compute_rental_days(r.issue_date, as_of)
            estimated += compute_rent(days, book.rent_per_day)

        current_app.logger.debug(
            f"[reports] rent book={book.id} settled={settled} estimated={estimated} open={open_count}"
        )
        return {
            "bookId": book.id,
            "bookName": book.book_name,
            "rentPerDay": money(book.rent_per_day),
            "settledRent": money(settled),
            "estimatedOpenRent": money(estimated),
            "returnedRentals": len(rentals) - open_count,
            "openRentals": open_count,
            "asOf": isoformat(now),
        }

    def rentals_for_user(self, user_id: int) -> list:
        if not self.users.get_by_id(user_id):
            raise UserNotFound()

        rentals = self.rentals.list_by_user(user_id)
        books = self.books.get_many(r.book_id for r in rentals)

        out = []
        for r in rentals:
            b = books.get(r.book_id)
            row = rental_dict(r)
            row["bookName"] = b.book_name if b else UNKNOWN_BOOK
            row["book"] = book_dict(b) if b else None
            out.append(row)
        return out

    def rentals_issued_between(self, start, end) -> list:
        if start > end:
            raise InvalidTemporalOrder("start date must not be after end date")

        rentals = self.rentals.list_issued_between(start, end)
        books = self.books.get_many(r.book_id for r in rentals)
        users = self.users.get_many(r.user_id for r in rentals)

        out = []
        for r in rentals:
            b = books.get(r.book_id)
            u = users.get(r.user_id)
            row = rental_dict(r)
            row["bookName"] = b.book_name if b else UNKNOWN_BOOK
            row["username"] = u.username if u else UNKNOWN_USER
            row["email"] = u.email if u else None
            out.append(row)
        return out
