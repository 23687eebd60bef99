"""Activity log model.

Append-only audit trail. This module only contains the SQLAlchemy model;
writes go through `repositories.activitylog_repository`.
"""

from db import db
from utils import now_utc, isoformat


class ActivityLog(db.Model):
    __tablename__ = "activity_log"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = db.Column(db.String(50), nullable=False)
    entity_type = db.Column(db.String(50))
    entity_id = db.Column(db.Integer)
    details = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=now_utc, index=True)

    def to_dict(self, user_name=None):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": user_name,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "details": self.details,
            "created_at": isoformat(self.created_at),
        }
