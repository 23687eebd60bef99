"""
Repository for Setting database operations
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.setting import Setting
from utils import now_utc


class SettingRepository:
    """Repository for Setting database operations"""

    @staticmethod
    def get_all():
        return Setting.query.order_by(Setting.key).all()

    @staticmethod
    def get(key):
        row = db.session.get(Setting, key)
        return row.value if row else None

    @staticmethod
    def upsert(key, value):
        """Insert or replace, always stamping updated_at"""
        dialect = db.session.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        stmt = insert(Setting).values(key=key, value=value, updated_at=now_utc())
        stmt = stmt.on_conflict_do_update(
            index_elements=["key"],
            set_=dict(value=stmt.excluded.value, updated_at=stmt.excluded.updated_at),
        )
        try:
            db.session.execute(stmt)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
