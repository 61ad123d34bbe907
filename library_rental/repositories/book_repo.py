from sqlalchemy import func
from library_rental.models.book import Book
from library_rental.extensions import db
from library_rental.utils.decorators import store_call

class BookRepo:
    @store_call
    def list_all(self):
        return Book.query.order_by(Book.id.desc()).all()

    @store_call
    def get(self, book_id: int):
        return db.session.get(Book, book_id)

    @store_call
    def get_many(self, book_ids) -> dict:
        ids = set(book_ids)
        if not ids:
            return {}
        return {b.id: b for b in Book.query.filter(Book.id.in_(ids)).all()}

    @store_call
    def find_by_name(self, name: str, case_insensitive: bool = True):
        if case_insensitive:
            return Book.query.filter(func.lower(Book.book_name) == name.lower()).first()
        return Book.query.filter_by(book_name=name).first()

    @store_call
    def find_by_filter(self, category=None, name_substring=None, rent_range=None):
        q = Book.query
        if category:
            q = q.filter(Book.category == category)
        if name_substring:
            # kullanıcının % ve _ karakterleri wildcard değil
            pattern = (
                name_substring.replace("\\", "\\\\")
                .replace("%", "\\%")
                .replace("_", "\\_")
            )
            q = q.filter(Book.book_name.ilike(f"%{pattern}%", escape="\\"))
        if rent_range is not None:
            low, high = rent_range
            q = q.filter(Book.rent_per_day >= low, Book.rent_per_day <= high)
        return q.order_by(Book.book_name.asc()).all()

    @store_call
    def create(self, book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @store_call
    def update(self):
        db.session.commit()

    @store_call
    def delete(self, book: Book):
        db.session.delete(book)
        db.session.commit()
