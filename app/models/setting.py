"""
Model: Setting
"""

from db import db
from utils import now_utc, isoformat


class Setting(db.Model):
    __tablename__ = "settings"

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text)
    updated_at = db.Column(db.DateTime, default=now_utc, nullable=False)

    def to_dict(self):
        return {"key": self.key, "value": self.value, "updated_at": isoformat(self.updated_at)}
