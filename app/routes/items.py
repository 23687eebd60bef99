"""
Item Routes - stock, maintenance, notes and shift handovers
"""

from datetime import timedelta

from flask import Blueprint
from flask_login import current_user

from auth import access_required
from api_responses import success_response, created_response, handle_api_errors
from exceptions import ValidationException
from services import get_board_service
from routes import include_resolved, bounded_limit, json_body
from utils import now_utc, ensure_utc
from constants import SHIFT_LOG_LIMIT, SHIFT_LOG_MAX_LIMIT, MAX_NOTE_EXPIRY_MINUTES

items_bp = Blueprint("items", __name__, url_prefix="/api")


# === STOCK ===
@items_bp.get("/stock/<category>")
@handle_api_errors("Failed to get stock items")
def list_stock_api(category):
    return success_response(data=get_board_service().list_stock(category, active_only=not include_resolved()))


@items_bp.post("/stock")
@access_required()
@handle_api_errors("Failed to add stock item")
def add_stock_api():
    data = json_body()
    item_id = get_board_service().add_stock_item(
        data.get("category"), data.get("item"), data.get("detail"), data.get("severity"), current_user.id
    )
    return created_response(item_id)


@items_bp.delete("/stock/<int:item_id>")
@access_required()
@handle_api_errors("Failed to resolve item")
def resolve_stock_api(item_id):
    get_board_service().resolve_stock_item(item_id, current_user.id)
    return success_response()


# === MAINTENANCE ===
@items_bp.get("/maintenance")
@handle_api_errors("Failed to get maintenance")
def list_maintenance_api():
    return success_response(data=get_board_service().list_maintenance(active_only=not include_resolved()))


@items_bp.post("/maintenance")
@access_required()
@handle_api_errors("Failed to add maintenance")
def add_maintenance_api():
    data = json_body()
    ticket_id = get_board_service().add_maintenance_item(
        data.get("item"), data.get("detail"), data.get("severity"), current_user.id, priority=data.get("priority")
    )
    return created_response(ticket_id)


@items_bp.delete("/maintenance/<int:ticket_id>")
@access_required()
@handle_api_errors("Failed to resolve maintenance")
def resolve_maintenance_api(ticket_id):
    get_board_service().resolve_maintenance_item(ticket_id, current_user.id)
    return success_response()


# === NOTES ===
def _note_expiry(data):
    minutes = data.get("expiresInMinutes", data.get("expires_in_minutes"))
    if minutes is not None:
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 1:
            raise ValidationException("expiresInMinutes must be a positive integer")
        if minutes > MAX_NOTE_EXPIRY_MINUTES:
            raise ValidationException(f"expiresInMinutes must be at most {MAX_NOTE_EXPIRY_MINUTES}")
        return now_utc() + timedelta(minutes=minutes)

    raw = data.get("expiresAt", data.get("expires_at"))
    if raw in (None, ""):
        return None
    expires_at = ensure_utc(raw) if isinstance(raw, str) else None
    if expires_at is None:
        raise ValidationException("expiresAt must be an ISO-8601 timestamp")
    return expires_at


@items_bp.get("/notes")
@handle_api_errors("Failed to get notes")
def list_notes_api():
    return success_response(data=get_board_service().list_notes(active_only=not include_resolved()))


@items_bp.post("/notes")
@access_required()
@handle_api_errors("Failed to add note")
def add_note_api():
    data = json_body()
    note_id = get_board_service().add_note(data.get("text"), current_user.id, expires_at=_note_expiry(data))
    return created_response(note_id)


@items_bp.delete("/notes/<int:note_id>")
@access_required()
@handle_api_errors("Failed to resolve note")
def resolve_note_api(note_id):
    get_board_service().resolve_note(note_id, current_user.id)
    return success_response()


# === SHIFT LOG ===
@items_bp.get("/shift-log")
@handle_api_errors("Failed to get shift log")
def list_shift_log_api():
    limit = bounded_limit(SHIFT_LOG_LIMIT, SHIFT_LOG_MAX_LIMIT)
    return success_response(data=get_board_service().list_shift_log(limit))


@items_bp.post("/shift-log")
@access_required()
@handle_api_errors("Failed to add shift entry")
def add_shift_entry_api():
    data = json_body()
    entry_id = get_board_service().add_shift_entry(
        data.get("shiftType"), data.get("focus"), data.get("eta"), data.get("notes"), current_user.id
    )
    return created_response(entry_id)


@items_bp.delete("/shift-log/<int:entry_id>")
@access_required()
@handle_api_errors("Failed to delete shift entry")
def delete_shift_entry_api(entry_id):
    get_board_service().delete_shift_entry(entry_id, current_user.id)
    return success_response()
