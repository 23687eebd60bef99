"""
Repository for ActivityLog database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.activitylog import ActivityLog
from models.user import User


class ActivityLogRepository:
    """Repository for ActivityLog database operations"""

    @staticmethod
    def recent(limit):
        """Newest entries joined with the actor's name"""
        return (
            db.session.query(ActivityLog, User.name)
            .outerjoin(User, ActivityLog.user_id == User.id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def create(**kwargs):
        """Append one ActivityLog record"""
        try:
            item = ActivityLog(**kwargs)
            db.session.add(item)
            db.session.commit()
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
