"""
Request contracts (API sınırında doğrulama).

JSON alanları camelCase; Python tarafında snake_case.
Tarihler ISO-8601 string olarak gelir ve naive UTC datetime'a çevrilir.
"""
from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from library_rental.utils.dates import parse_timestamp


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


def _timestamp(v):
    if v is None:
        return v
    return parse_timestamp(v)


def _is_date_only(v) -> bool:
    return isinstance(v, str) and len(v.strip()) == 10


# -----------------------------
# Books
# -----------------------------
class BookCreate(RequestModel):
    book_name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    rent_per_day: float = Field(..., ge=0)
    author: Optional[str] = None
    published_date: Optional[date] = None
    isbn: Optional[str] = None
    available_copies: int = Field(0, ge=0)
    description: Optional[str] = None


class BookUpdate(RequestModel):
    book_name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    rent_per_day: Optional[float] = Field(None, ge=0)
    author: Optional[str] = None
    published_date: Optional[date] = None
    isbn: Optional[str] = None
    available_copies: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None


class BookSearch(RequestModel):
    category: Optional[str] = None
    name: Optional[str] = None
    min_rent: Optional[float] = Field(None, ge=0)
    max_rent: Optional[float] = Field(None, ge=0)

    @property
    def rent_range(self):
        if self.min_rent is None or self.max_rent is None:
            return None
        return (self.min_rent, self.max_rent)


class RentRange(RequestModel):
    min_rent: float = Field(..., ge=0)
    max_rent: float = Field(..., ge=0)


# -----------------------------
# Users
# -----------------------------
class Address(RequestModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None


class UserCreate(RequestModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone_number: Optional[str] = None
    address: Optional[Address] = None

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


# -----------------------------
# Rentals
# -----------------------------
class IssueRequest(RequestModel):
    book_id: int
    user_id: int
    issue_date: Optional[datetime] = None

    @field_validator("issue_date", mode="before")
    @classmethod
    def parse_issue_date(cls, v):
        return _timestamp(v)


class ReturnRequest(RequestModel):
    book_id: int
    user_id: int
    return_date: datetime

    @field_validator("return_date", mode="before")
    @classmethod
    def parse_return_date(cls, v):
        return _timestamp(v)


class DateRangeQuery(RequestModel):
    start: datetime
    end: datetime

    @model_validator(mode="before")
    @classmethod
    def parse_range(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("start") is not None:
            data["start"] = parse_timestamp(data["start"])
        end = data.get("end")
        if end is not None:
            # sadece tarih verildiyse günün sonuna kadar dahil
            parsed = parse_timestamp(end)
            if _is_date_only(end):
                parsed = parsed + timedelta(days=1) - timedelta(microseconds=1)
            data["end"] = parsed
        return data
