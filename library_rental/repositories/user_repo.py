from library_rental.models.user import User
from library_rental.extensions import db
from library_rental.utils.decorators import store_call

class UserRepo:
    @store_call
    def list_all(self):
        return User.query.order_by(User.id.desc()).all()

    @store_call
    def get_by_email(self, email: str):
        return User.query.filter_by(email=email).first()

    @store_call
    def get_by_id(self, user_id: int):
        return db.session.get(User, user_id)

    @store_call
    def get_many(self, user_ids) -> dict:
        ids = set(user_ids)
        if not ids:
            return {}
        return {u.id: u for u in User.query.filter(User.id.in_(ids)).all()}

    @store_call
    def rollback(self):
        db.session.rollback()

    @store_call
    def create(self, user: User):
        db.session.add(user)
        db.session.commit()
        return user
