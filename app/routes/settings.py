"""
Settings Routes - board key/value settings
"""

from flask import Blueprint

from auth import access_required
from api_responses import success_response, handle_api_errors
from services import get_board_service
from routes import json_body

settings_bp = Blueprint("settings", __name__, url_prefix="/api")


@settings_bp.get("/settings")
@handle_api_errors("Failed to get settings")
def get_settings_api():
    return success_response(data=get_board_service().list_settings())


@settings_bp.put("/settings/<key>")
@access_required()
@handle_api_errors("Failed to update setting")
def set_setting_api(key):
    get_board_service().set_setting(key, json_body().get("value"))
    return success_response()
