"""
Repository for StockItem database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.stock import StockItem
from utils import now_utc


class StockRepository:
    """Repository for StockItem database operations"""

    @staticmethod
    def list_by_category(category, active_only=True):
        """Items of one category, newest first"""
        query = StockItem.query.filter_by(category=category)
        if active_only:
            query = query.filter_by(is_active=True)
        return query.order_by(StockItem.created_at.desc(), StockItem.id.desc()).all()

    @staticmethod
    def create(**kwargs):
        """Create new StockItem record"""
        try:
            item = StockItem(**kwargs)
            db.session.add(item)
            db.session.commit()
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def resolve(id):
        """Deactivate an active item. Returns the number of rows changed."""
        try:
            count = StockItem.query.filter_by(id=id, is_active=True).update(
                {StockItem.is_active: False, StockItem.resolved_at: now_utc()}, synchronize_session=False
            )
            db.session.commit()
            return count
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count_active(category):
        return StockItem.query.filter_by(category=category, is_active=True).count()
