"""
Model: MaintenanceTicket
"""

from db import db
from utils import now_utc, isoformat
from constants import DEFAULT_MAINT_SEVERITY, DEFAULT_MAINT_PRIORITY


class MaintenanceTicket(db.Model):
    __tablename__ = "maintenance"

    id = db.Column(db.Integer, primary_key=True)
    item = db.Column(db.String(200), nullable=False)
    detail = db.Column(db.Text, default="")
    severity = db.Column(db.String(16), nullable=False, default=DEFAULT_MAINT_SEVERITY)
    priority = db.Column(db.Integer, nullable=False, default=DEFAULT_MAINT_PRIORITY)  # lower is more urgent
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=now_utc, nullable=False)
    resolved_at = db.Column(db.DateTime)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    __table_args__ = (
        db.CheckConstraint("severity IN ('none', 'low', 'maint')", name="ck_maint_severity"),
        db.Index("idx_maint_active", "is_active"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "item": self.item,
            "detail": self.detail or "",
            "severity": self.severity,
            "priority": self.priority,
            "created_by": self.created_by,
            "created_at": isoformat(self.created_at),
            "resolved_at": isoformat(self.resolved_at),
            "is_active": bool(self.is_active),
        }
