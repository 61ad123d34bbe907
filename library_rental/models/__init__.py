from library_rental.models.book import Book
from library_rental.models.user import User
from library_rental.models.rental import Rental

__all__ = ["Book", "User", "Rental"]
