from decimal import Decimal

from flask import current_app

from library_rental.errors import BookHasOpenRentals, BookNotFound, InvalidInput
from library_rental.models.book import Book


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


class BookService:
    def __init__(self, books, rentals):
        self.books = books
        self.rentals = rentals

    def list_books(self):
        return self.books.list_all()

    def get_book(self, book_id: int):
        book = self.books.get(book_id)
        if not book:
            raise BookNotFound()
        return book

    def search(self, category=None, name=None, rent_range=None):
        if rent_range is not None and rent_range[0] > rent_range[1]:
            raise InvalidInput("minRent must not be greater than maxRent")
        return self.books.find_by_filter(category=category, name_substring=name, rent_range=rent_range)

    def create_book(self, data: dict):
        book = Book(
            book_name=data["book_name"],
            category=data["category"],
            rent_per_day=_money(data["rent_per_day"]),
            author=data.get("author"),
            published_date=data.get("published_date"),
            isbn=data.get("isbn"),
            available_copies=int(data.get("available_copies") or 0),
            description=data.get("description"),
        )
        self.books.create(book)
        current_app.logger.info(f"[catalog] book created id={book.id} name={book.book_name!r}")
        return book

    def update_book(self, book_id: int, data: dict):
        book = self.get_book(book_id)
        for k in ["book_name", "category"]:
            if data.get(k) is not None:
                setattr(book, k, data[k])
        for k in ["author", "published_date", "isbn", "description"]:
            if k in data:
                setattr(book, k, data[k])

        if data.get("rent_per_day") is not None:
            book.rent_per_day = _money(data["rent_per_day"])
        if data.get("available_copies") is not None:
            book.available_copies = int(data["available_copies"])

        self.books.update()
        current_app.logger.info(f"[catalog] book updated id={book.id} fields={sorted(data)}")
        return book

    def delete_book(self, book_id: int):
        book = self.get_book(book_id)
        # açık kiralama varken silme yok; iade edilmiş kayıtlar kalır
        if self.rentals.count_open_for_book(book_id) > 0:
            raise BookHasOpenRentals()
        self.books.delete(book)
        current_app.logger.info(f"[catalog] book deleted id={book_id}")
