"""
Models package

One module per board entity:
- user.py
- stock.py
- maintenance.py
- note.py
- shiftlog.py
- setting.py
- activitylog.py
"""

from .user import User
from .stock import StockItem
from .maintenance import MaintenanceTicket
from .note import Note
from .shiftlog import ShiftLogEntry
from .setting import Setting
from .activitylog import ActivityLog

__all__ = [
    "User",
    "StockItem",
    "MaintenanceTicket",
    "Note",
    "ShiftLogEntry",
    "Setting",
    "ActivityLog",
]
