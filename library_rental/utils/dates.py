from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """DB'ye naive UTC yazıyoruz; tüm karşılaştırmalar bu formatta."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_timestamp(value) -> datetime:
    """
    ISO-8601 tarih ya da tarih-saat kabul eder ("2024-01-01",
    "2024-01-01T10:00:00Z", "2024-01-01T10:00:00+03:00").
    Parse edilemezse ValueError.
    """
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")

    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"Invalid timestamp: {value!r}") from None
    return to_naive_utc(parsed)


def isoformat(value):
    return value.isoformat() if value is not None else None
