"""
Model: Note
"""

from db import db
from utils import now_utc, isoformat


class Note(db.Model):
    __tablename__ = "notes"

    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=now_utc, nullable=False)
    expires_at = db.Column(db.DateTime)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    __table_args__ = (db.Index("idx_notes_active", "is_active"),)

    def to_dict(self):
        return {
            "id": self.id,
            "text": self.text,
            "created_by": self.created_by,
            "created_at": isoformat(self.created_at),
            "expires_at": isoformat(self.expires_at),
            "is_active": bool(self.is_active),
        }
