from library_rental.extensions import db
from library_rental.utils.dates import utcnow

class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("rent_per_day >= 0", name="ck_books_rent_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    book_name = db.Column(db.String(200), nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    rent_per_day = db.Column(db.Numeric(10, 2), nullable=False)

    author = db.Column(db.String(200), nullable=True)
    published_date = db.Column(db.Date, nullable=True)
    isbn = db.Column(db.String(32), nullable=True, index=True)
    available_copies = db.Column(db.Integer, nullable=False, default=0)
    description = db.Column(db.Text, nullable=True)

    added_date = db.Column(db.DateTime, nullable=False, default=utcnow)
