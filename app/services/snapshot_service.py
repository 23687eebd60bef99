"""Aggregate read model for the board.

A snapshot is a fixed sequence of independent reads, not one transaction:
a write landing mid-assembly can make counts briefly disagree with list
lengths. The next refresh signal brings every client back in line.
"""

from repositories.stock_repository import StockRepository
from repositories.maintenance_repository import MaintenanceRepository
from repositories.note_repository import NoteRepository
from repositories.shiftlog_repository import ShiftLogRepository
from repositories.setting_repository import SettingRepository
from metrics import track_snapshot, update_board_metrics
from constants import SHIFT_LOG_LIMIT


def settings_map():
    return {row.key: row.value for row in SettingRepository.get_all()}


def shift_log_entries(limit=SHIFT_LOG_LIMIT):
    return [entry.to_dict(created_by_name=name) for entry, name in ShiftLogRepository.list_recent(limit)]


def get_stats():
    stats = {
        "outCount": StockRepository.count_active("out"),
        "lowCount": StockRepository.count_active("low"),
        "maintCount": MaintenanceRepository.count_active(),
        "notesCount": NoteRepository.count_active(),
    }
    update_board_metrics(stats)
    return stats


@track_snapshot
def get_board_snapshot(shift_limit=SHIFT_LOG_LIMIT):
    return {
        "out": [i.to_dict() for i in StockRepository.list_by_category("out")],
        "low": [i.to_dict() for i in StockRepository.list_by_category("low")],
        "maint": [i.to_dict() for i in MaintenanceRepository.list()],
        "notes": [n.to_dict() for n in NoteRepository.list()],
        "shiftLog": shift_log_entries(shift_limit),
        "settings": settings_map(),
        "stats": get_stats(),
    }
