from flask import current_app
from sqlalchemy.exc import IntegrityError

from library_rental.errors import DuplicateEmail, UserNotFound
from library_rental.models.user import User


class UserService:
    def __init__(self, users):
        self.users = users

    def list_users(self):
        return self.users.list_all()

    def get_user(self, user_id: int):
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFound()
        return user

    def create_user(self, data: dict):
        email = data["email"].strip().lower()
        if self.users.get_by_email(email):
            raise DuplicateEmail()

        address = data.get("address") or {}
        user = User(
            username=(data.get("username") or "").strip(),
            email=email,
            phone_number=data.get("phone_number"),
            street=address.get("street"),
            city=address.get("city"),
            state=address.get("state"),
            zip_code=address.get("zip"),
        )
        try:
            self.users.create(user)
        except IntegrityError:
            self.users.rollback()
            raise DuplicateEmail() from None

        current_app.logger.info(f"[users] user created id={user.id} email={user.email}")
        return user
