from datetime import datetime
from library_rental.models.rental import Rental
from library_rental.extensions import db
from library_rental.utils.decorators import store_call

class RentalRepo:
    @store_call
    def get(self, rental_id: int):
        return db.session.get(Rental, rental_id)

    @store_call
    def find_open(self, book_id: int, user_id: int):
        return Rental.query.filter(
            Rental.book_id == book_id,
            Rental.user_id == user_id,
            Rental.return_date.is_(None)
        ).first()

    @store_call
    def count_open_for_book(self, book_id: int) -> int:
        return Rental.query.filter(
            Rental.book_id == book_id,
            Rental.return_date.is_(None)
        ).count()

    @store_call
    def list_by_book(self, book_id: int):
        return Rental.query.filter_by(book_id=book_id).order_by(Rental.issue_date.asc(), Rental.id.asc()).all()

    @store_call
    def list_by_user(self, user_id: int):
        return Rental.query.filter_by(user_id=user_id).order_by(Rental.issue_date.desc(), Rental.id.desc()).all()

    @store_call
    def list_issued_between(self, start: datetime, end: datetime):
        return Rental.query.filter(
            Rental.issue_date >= start,
            Rental.issue_date <= end
        ).order_by(Rental.issue_date.asc(), Rental.id.asc()).all()

    @store_call
    def list_all(self):
        return Rental.query.order_by(Rental.id.desc()).all()

    @store_call
    def create(self, rental: Rental):
        # IntegrityError (open-pair index) çağırana bırakılır
        db.session.add(rental)
        db.session.commit()
        return rental

    @store_call
    def close(self, rental_id: int, return_date: datetime, total_rent) -> bool:
        """
        Sadece hâlâ açıksa kapatır (WHERE return_date IS NULL).
        Eşzamanlı iki iadeden yalnızca biri True alır.
        """
        updated = Rental.query.filter(
            Rental.id == rental_id,
            Rental.return_date.is_(None)
        ).update(
            {Rental.return_date: return_date, Rental.total_rent: total_rent},
            synchronize_session=False
        )
        db.session.commit()
        return updated == 1

    @store_call
    def rollback(self):
        db.session.rollback()
