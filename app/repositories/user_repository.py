"""
Repository for User database operations
"""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.user import User
from utils import now_utc


class UserRepository:
    """Repository for User database operations"""

    @staticmethod
    def get_all():
        """Get all users ordered by name"""
        return User.query.order_by(User.name).all()

    @staticmethod
    def get_by_id(id):
        """Get User by ID"""
        return db.session.get(User, id)

    @staticmethod
    def find_by_name(name):
        """Case-insensitive name lookup"""
        return User.query.filter(func.lower(User.name) == func.lower(name)).first()

    @staticmethod
    def create(**kwargs):
        """Create new User record"""
        try:
            item = User(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def touch_last_login(id):
        User.query.filter_by(id=id).update({User.last_login: now_utc()})
        db.session.commit()

    @staticmethod
    def count_admins():
        return User.query.filter_by(role="admin").count()

    @staticmethod
    def update_pin(id, pin_hash):
        try:
            count = User.query.filter_by(id=id).update({User.pin_hash: pin_hash})
            db.session.commit()
            return count
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
