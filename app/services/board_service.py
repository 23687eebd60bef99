"""Domain operations for the shared board.

One `BoardService` is built by the application factory and handed to the
routes and background jobs. Each mutating operation is a single domain
step: the primary write commits first, then one activity row is appended
on a best-effort basis (a failed audit is logged and never undoes or fails
the write), then exactly one refresh signal goes out to the board room.
"""

import logging

from db import db
from repositories.stock_repository import StockRepository
from repositories.maintenance_repository import MaintenanceRepository
from repositories.note_repository import NoteRepository
from repositories.shiftlog_repository import ShiftLogRepository
from repositories.setting_repository import SettingRepository
from repositories.activitylog_repository import ActivityLogRepository
from services import snapshot_service
from exceptions import ValidationException
from metrics import board_mutations_total, audit_failures_total
from utils import now_utc, ensure_utc
from constants import (
    STOCK_CATEGORIES,
    SEVERITIES,
    DEFAULT_STOCK_SEVERITY,
    DEFAULT_MAINT_SEVERITY,
    DEFAULT_MAINT_PRIORITY,
    ENTITY_STOCK,
    ENTITY_MAINTENANCE,
    ENTITY_SHIFT,
    ACTION_ADD,
    ACTION_RESOLVE,
    ACTION_DELETE,
    SHIFT_LOG_LIMIT,
    ACTIVITY_LOG_LIMIT,
)

logger = logging.getLogger("main")


def _required_text(value, message):
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(message)
    return value.strip()


def _optional_text(value):
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationException("Text fields must be strings")
    return value.strip()


def _severity(value, default):
    if value is None or value == "":
        return default
    if value not in SEVERITIES:
        raise ValidationException(f"Severity must be one of: {', '.join(SEVERITIES)}")
    return value


class BoardService:
    """Store-backed operations for stock, maintenance, notes, shift log and settings."""

    def __init__(self, broadcaster=None):
        self.broadcaster = broadcaster

    # ----- plumbing -----

    def _audit(self, actor_id, action, entity_type, entity_id, details):
        try:
            ActivityLogRepository.create(
                user_id=actor_id or None,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                details=details,
            )
        except Exception as e:
            audit_failures_total.inc()
            logger.error(f"Activity log error: {e}", exc_info=True)
            db.session.rollback()

    def _changed(self, entity, action):
        board_mutations_total.labels(entity=entity, action=action).inc()
        if self.broadcaster is not None:
            self.broadcaster.notify_board_changed(reason=f"{entity}:{action}")

    # ----- stock -----

    def list_stock(self, category, active_only=True):
        if category not in STOCK_CATEGORIES:
            raise ValidationException("Invalid category")
        return [i.to_dict() for i in StockRepository.list_by_category(category, active_only)]

    def add_stock_item(self, category, item, detail=None, severity=None, actor_id=None):
        if not category or not isinstance(item, str) or not item.strip():
            raise ValidationException("Category and item required")
        if category not in STOCK_CATEGORIES:
            raise ValidationException("Invalid category")
        entry = StockRepository.create(
            category=category,
            item=item.strip(),
            detail=_optional_text(detail),
            severity=_severity(severity, DEFAULT_STOCK_SEVERITY),
            created_by=actor_id,
        )
        self._audit(actor_id, ACTION_ADD, ENTITY_STOCK, entry.id, f"Added {category}: {entry.item}")
        self._changed(ENTITY_STOCK, ACTION_ADD)
        return entry.id

    def resolve_stock_item(self, item_id, actor_id=None):
        """Idempotent: an unknown or already resolved id changes nothing and still succeeds."""
        changed = StockRepository.resolve(item_id)
        self._audit(actor_id, ACTION_RESOLVE, ENTITY_STOCK, item_id, "Resolved stock item")
        self._changed(ENTITY_STOCK, ACTION_RESOLVE)
        return changed

    # ----- maintenance -----

    def list_maintenance(self, active_only=True):
        return [t.to_dict() for t in MaintenanceRepository.list(active_only)]

    def add_maintenance_item(self, item, detail=None, severity=None, actor_id=None, priority=None):
        item = _required_text(item, "Item required")
        if priority is None:
            priority = DEFAULT_MAINT_PRIORITY
        elif isinstance(priority, bool) or not isinstance(priority, int) or priority < 1:
            raise ValidationException("Priority must be a positive integer")
        ticket = MaintenanceRepository.create(
            item=item,
            detail=_optional_text(detail),
            severity=_severity(severity, DEFAULT_MAINT_SEVERITY),
            priority=priority,
            created_by=actor_id,
        )
        self._audit(actor_id, ACTION_ADD, ENTITY_MAINTENANCE, ticket.id, f"Added maintenance: {ticket.item}")
        self._changed(ENTITY_MAINTENANCE, ACTION_ADD)
        return ticket.id

    def resolve_maintenance_item(self, ticket_id, actor_id=None):
        changed = MaintenanceRepository.resolve(ticket_id)
        self._audit(actor_id, ACTION_RESOLVE, ENTITY_MAINTENANCE, ticket_id, "Resolved maintenance item")
        self._changed(ENTITY_MAINTENANCE, ACTION_RESOLVE)
        return changed

    # ----- notes (not audited) -----

    def list_notes(self, active_only=True):
        return [n.to_dict() for n in NoteRepository.list(active_only)]

    def add_note(self, text, actor_id=None, expires_at=None):
        text = _required_text(text, "Text required")
        if expires_at is not None:
            expires_at = ensure_utc(expires_at)
            if expires_at is None:
                raise ValidationException("Invalid expiry time")
            if expires_at <= now_utc():
                raise ValidationException("Expiry time must be in the future")
        note = NoteRepository.create(text=text, created_by=actor_id, expires_at=expires_at)
        self._changed("note", ACTION_ADD)
        return note.id

    def resolve_note(self, note_id, actor_id=None):
        changed = NoteRepository.resolve(note_id)
        self._changed("note", ACTION_RESOLVE)
        return changed

    def expire_notes(self, now=None):
        """Deactivate notes past their expiry; one refresh only if something expired."""
        expired = NoteRepository.expire_due(now or now_utc())
        if expired:
            logger.info(f"Expired {expired} note(s)")
            self._changed("note", "expire")
        return expired

    # ----- shift log -----

    def list_shift_log(self, limit=SHIFT_LOG_LIMIT):
        return snapshot_service.shift_log_entries(limit)

    def add_shift_entry(self, shift_type, focus, eta=None, notes=None, actor_id=None):
        if not isinstance(shift_type, str) or not shift_type.strip() or not isinstance(focus, str) or not focus.strip():
            raise ValidationException("Shift type and focus required")
        entry = ShiftLogRepository.create(
            shift_type=shift_type.strip(),
            focus=focus.strip(),
            eta=_optional_text(eta),
            notes=_optional_text(notes),
            created_by=actor_id,
        )
        self._audit(actor_id, ACTION_ADD, ENTITY_SHIFT, entry.id, f"Shift handover: {entry.shift_type}")
        self._changed(ENTITY_SHIFT, ACTION_ADD)
        return entry.id

    def delete_shift_entry(self, entry_id, actor_id=None):
        removed = ShiftLogRepository.delete(entry_id)
        self._audit(actor_id, ACTION_DELETE, ENTITY_SHIFT, entry_id, "Deleted shift entry")
        self._changed(ENTITY_SHIFT, ACTION_DELETE)
        return removed

    # ----- settings -----

    def get_setting(self, key):
        return SettingRepository.get(key)

    def list_settings(self):
        return snapshot_service.settings_map()

    def set_setting(self, key, value):
        key = _required_text(key, "Setting key required")
        if value is None:
            raise ValidationException("Setting value required")
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValidationException("Setting value must be text")
        SettingRepository.upsert(key, str(value))
        self._changed("setting", "set")

    # ----- read model -----

    def get_activity_log(self, limit=ACTIVITY_LOG_LIMIT):
        return [entry.to_dict(user_name=name) for entry, name in ActivityLogRepository.recent(limit)]

    def get_stats(self):
        return snapshot_service.get_stats()

    def get_board_snapshot(self, shift_limit=SHIFT_LOG_LIMIT):
        return snapshot_service.get_board_snapshot(shift_limit)
