from datetime import datetime
from decimal import Decimal

from flask import current_app
from sqlalchemy.exc import IntegrityError

from library_rental.errors import (
    AlreadyIssued,
    BookNotFound,
    InvalidInput,
    InvalidReturnDate,
    RentalNotFound,
    UserNotFound,
)
from library_rental.models.rental import Rental
from library_rental.services.rent import compute_rent, compute_rental_days
from library_rental.utils.dates import parse_timestamp, utcnow


class RentalLedger:
    """
    Kiralama kayıtlarının tek sahibi: issue -> returned geçişi ve kira hesabı.
    Store erişimi constructor'da verilen repo'lar üzerinden.
    """

    def __init__(self, rentals, books, users, clock=utcnow):
        self.rentals = rentals
        self.books = books
        self.users = users
        self.clock = clock

    @staticmethod
    def _timestamp(value, label: str) -> datetime:
        try:
            return parse_timestamp(value)
        except ValueError:
            raise InvalidInput(f"Invalid {label}") from None

    def get(self, rental_id: int) -> Rental:
        rental = self.rentals.get(rental_id)
        if not rental:
            raise RentalNotFound("Rental not found")
        return rental

    def issue(self, book_id: int, user_id: int, issue_date=None) -> Rental:
        issued_at = self._timestamp(issue_date, "issue date") if issue_date is not None else self.clock()

        if not self.books.get(book_id):
            raise BookNotFound()
        if not self.users.get_by_id(user_id):
            raise UserNotFound()

        if self.rentals.find_open(book_id, user_id):
            raise AlreadyIssued()

        rental = Rental(
            book_id=book_id,
            user_id=user_id,
            issue_date=issued_at,
            return_date=None,
            total_rent=Decimal("0.00"),
        )
        try:
            self.rentals.create(rental)
        except IntegrityError:
            # eşzamanlı issue: uq_rentals_open_pair index'i yakaladı
            self.rentals.rollback()
            raise AlreadyIssued() from None

        current_app.logger.info(
            f"[ledger] issued rental={rental.id} book={book_id} user={user_id} at={issued_at.isoformat()}"
        )
        return rental

    def return_rental(self, book_id: int, user_id: int, return_date) -> Rental:
        returned_at = self._timestamp(return_date, "return date")

        rental = self.rentals.find_open(book_id, user_id)
        if not rental:
            raise RentalNotFound()

        book = self.books.get(book_id)
        if not book:
            raise BookNotFound()

        if returned_at < rental.issue_date:
            raise InvalidReturnDate()

        rental_days = compute_rental_days(rental.issue_date, returned_at)
        total_rent = compute_rent(rental_days, book.rent_per_day)

        if not self.rentals.close(rental.id, returned_at, total_rent):
            # arada başka bir istek iade etti
            raise RentalNotFound()

        current_app.logger.info(
            f"[ledger] returned rental={rental.id} days={rental_days} total_rent={total_rent}"
        )
        return self.rentals.get(rental.id)

    def list_all(self):
        return self.rentals.list_all()
