from flask import current_app


def get_board_service():
    """The BoardService owned by the running application."""
    return current_app.extensions["opsboard"]
