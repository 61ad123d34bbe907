"""Kira hesabı: tek formül, ledger ve raporlar aynı fonksiyonları kullanır."""
from datetime import datetime, timedelta
from decimal import Decimal

ONE_DAY = timedelta(days=1)
CENTS = Decimal("0.01")


def compute_rental_days(issue_date: datetime, return_date: datetime) -> int:
    """
    max(1, ceil(gün farkı)): yarım gün tam gün sayılır, aynı gün iade en az 1 gün.
    return_date < issue_date ise ValueError.
    """
    if return_date < issue_date:
        raise ValueError("return_date is before issue_date")
    whole, remainder = divmod(return_date - issue_date, ONE_DAY)
    if remainder:
        whole += 1
    return max(1, whole)


def compute_rent(rental_days: int, rent_per_day) -> Decimal:
    rate = rent_per_day if isinstance(rent_per_day, Decimal) else Decimal(str(rent_per_day))
    return (Decimal(rental_days) * rate).quantize(CENTS)
