"""
Repository for ShiftLogEntry database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.shiftlog import ShiftLogEntry
from models.user import User


class ShiftLogRepository:
    """Repository for ShiftLogEntry database operations"""

    @staticmethod
    def list_recent(limit):
        """Newest entries joined with the author's name"""
        return (
            db.session.query(ShiftLogEntry, User.name)
            .outerjoin(User, ShiftLogEntry.created_by == User.id)
            .order_by(ShiftLogEntry.created_at.desc(), ShiftLogEntry.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def create(**kwargs):
        """Create new ShiftLogEntry record"""
        try:
            item = ShiftLogEntry(**kwargs)
            db.session.add(item)
            db.session.commit()
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def delete(id):
        """Hard delete. Returns the number of rows removed."""
        try:
            count = ShiftLogEntry.query.filter_by(id=id).delete(synchronize_session=False)
            db.session.commit()
            return count
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
