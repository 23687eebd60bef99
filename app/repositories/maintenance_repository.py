"""
Repository for MaintenanceTicket database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.maintenance import MaintenanceTicket
from utils import now_utc


class MaintenanceRepository:
    """Repository for MaintenanceTicket database operations"""

    @staticmethod
    def list(active_only=True):
        """Active tickets by urgency then newest; full history newest first"""
        if active_only:
            return (
                MaintenanceTicket.query.filter_by(is_active=True)
                .order_by(
                    MaintenanceTicket.priority.asc(),
                    MaintenanceTicket.created_at.desc(),
                    MaintenanceTicket.id.desc(),
                )
                .all()
            )
        return MaintenanceTicket.query.order_by(
            MaintenanceTicket.created_at.desc(), MaintenanceTicket.id.desc()
        ).all()

    @staticmethod
    def create(**kwargs):
        """Create new MaintenanceTicket record"""
        try:
            item = MaintenanceTicket(**kwargs)
            db.session.add(item)
            db.session.commit()
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def resolve(id):
        try:
            count = MaintenanceTicket.query.filter_by(id=id, is_active=True).update(
                {MaintenanceTicket.is_active: False, MaintenanceTicket.resolved_at: now_utc()},
                synchronize_session=False,
            )
            db.session.commit()
            return count
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count_active():
        return MaintenanceTicket.query.filter_by(is_active=True).count()
