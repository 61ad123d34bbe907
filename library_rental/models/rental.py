from library_rental.extensions import db
from library_rental.utils.dates import utcnow

class Rental(db.Model):
    __tablename__ = "rentals"
    __table_args__ = (
        db.CheckConstraint("total_rent >= 0", name="ck_rentals_rent_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)

    # FK yok: kitap/kullanıcı silinse de ledger kaydı kalır ("Unknown Book")
    book_id = db.Column(db.Integer, nullable=False, index=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)

    issue_date = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    return_date = db.Column(db.DateTime, nullable=True)  # None = hâlâ kirada

    total_rent = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    @property
    def is_open(self) -> bool:
        return self.return_date is None
