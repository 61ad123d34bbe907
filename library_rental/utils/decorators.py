from functools import wraps

from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeoutError

from library_rental.errors import StoreUnavailable
from library_rental.extensions import db


def store_call(fn):
    """
    Repo metodları için: bağlantı/timeout hatalarını StoreUnavailable'a çevirir.
    Retry yok; session rollback edilip hata yukarı verilir.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (OperationalError, InterfaceError, PoolTimeoutError) as e:
            db.session.rollback()
            raise StoreUnavailable(f"Storage error: {e.__class__.__name__}") from e
    return wrapper
