"""
Model: User
"""

from db import db
from utils import now_utc, isoformat
from flask_login import UserMixin
from constants import ROLE_ADMIN


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    pin_hash = db.Column("pin", db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="staff")
    created_at = db.Column(db.DateTime, default=now_utc)
    last_login = db.Column(db.DateTime)

    __table_args__ = (db.CheckConstraint("role IN ('admin', 'staff')", name="ck_users_role"),)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def has_access(self, access):
        if access == ROLE_ADMIN:
            return self.is_admin
        return True

    def summary(self):
        return {"id": self.id, "name": self.name, "role": self.role}

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "created_at": isoformat(self.created_at),
            "last_login": isoformat(self.last_login),
        }


# Name lookups are case-insensitive, so uniqueness is too
db.Index("ux_users_name_lower", db.func.lower(User.name), unique=True)
