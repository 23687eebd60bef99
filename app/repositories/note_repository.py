"""
Repository for Note database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.note import Note


class NoteRepository:
    """Repository for Note database operations"""

    @staticmethod
    def list(active_only=True):
        query = Note.query
        if active_only:
            query = query.filter_by(is_active=True)
        return query.order_by(Note.created_at.desc(), Note.id.desc()).all()

    @staticmethod
    def create(**kwargs):
        """Create new Note record"""
        try:
            item = Note(**kwargs)
            db.session.add(item)
            db.session.commit()
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def resolve(id):
        try:
            count = Note.query.filter_by(id=id, is_active=True).update(
                {Note.is_active: False}, synchronize_session=False
            )
            db.session.commit()
            return count
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def expire_due(now):
        """Deactivate active notes whose expiry has passed"""
        try:
            count = Note.query.filter(
                Note.is_active.is_(True), Note.expires_at.isnot(None), Note.expires_at <= now
            ).update({Note.is_active: False}, synchronize_session=False)
            db.session.commit()
            return count
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count_active():
        return Note.query.filter_by(is_active=True).count()
