"""
Model: ShiftLogEntry
"""

from db import db
from utils import now_utc, isoformat


class ShiftLogEntry(db.Model):
    __tablename__ = "shift_log"

    id = db.Column(db.Integer, primary_key=True)
    shift_type = db.Column(db.String(50), nullable=False)
    focus = db.Column(db.Text, nullable=False)
    eta = db.Column(db.String(100), default="")
    notes = db.Column(db.Text, default="")
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=now_utc, nullable=False)

    __table_args__ = (db.Index("idx_shift_created", "created_at"),)

    def to_dict(self, created_by_name=None):
        return {
            "id": self.id,
            "shift_type": self.shift_type,
            "focus": self.focus,
            "eta": self.eta or "",
            "notes": self.notes or "",
            "created_by": self.created_by,
            "created_by_name": created_by_name,
            "created_at": isoformat(self.created_at),
        }
