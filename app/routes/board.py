"""
Board Routes - aggregate snapshot, counts, export brief and activity feed
"""

from flask import Blueprint, Response

from auth import access_required
from api_responses import success_response, handle_api_errors
from services import get_board_service
from services.export_service import render_brief, brief_filename
from routes import bounded_limit
from utils import now_utc
from constants import ACTIVITY_LOG_LIMIT, ACTIVITY_LOG_MAX_LIMIT

board_bp = Blueprint("board", __name__, url_prefix="/api")


@board_bp.get("/board")
@handle_api_errors("Failed to get board data")
def get_board_api():
    return success_response(data=get_board_service().get_board_snapshot())


@board_bp.get("/stats")
@handle_api_errors("Failed to get stats")
def get_stats_api():
    return success_response(data=get_board_service().get_stats())


@board_bp.get("/export")
@handle_api_errors("Failed to export")
def export_brief_api():
    snapshot = get_board_service().get_board_snapshot()
    generated_at = now_utc()
    return Response(
        render_brief(snapshot, generated_at),
        content_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{brief_filename(snapshot, generated_at)}"'},
    )


@board_bp.get("/activity")
@access_required()
@handle_api_errors("Failed to get activity log")
def get_activity_api():
    limit = bounded_limit(ACTIVITY_LOG_LIMIT, ACTIVITY_LOG_MAX_LIMIT)
    return success_response(data=get_board_service().get_activity_log(limit))
