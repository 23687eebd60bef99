"""
Model: StockItem
"""

from db import db
from utils import now_utc, isoformat
from constants import DEFAULT_STOCK_SEVERITY


class StockItem(db.Model):
    __tablename__ = "stock_items"

    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.String(8), nullable=False)  # 'out' | 'low'
    item = db.Column(db.String(200), nullable=False)
    detail = db.Column(db.Text, default="")
    severity = db.Column(db.String(16), nullable=False, default=DEFAULT_STOCK_SEVERITY)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=now_utc, nullable=False)
    resolved_at = db.Column(db.DateTime)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    __table_args__ = (
        db.CheckConstraint("category IN ('out', 'low')", name="ck_stock_category"),
        db.CheckConstraint("severity IN ('none', 'low', 'maint')", name="ck_stock_severity"),
        # Board assembly reads active rows per category
        db.Index("idx_stock_active", "is_active", "category"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "category": self.category,
            "item": self.item,
            "detail": self.detail or "",
            "severity": self.severity,
            "created_by": self.created_by,
            "created_at": isoformat(self.created_at),
            "resolved_at": isoformat(self.resolved_at),
            "is_active": bool(self.is_active),
        }
