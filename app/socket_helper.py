"""
Realtime fan-out for the shared board.

Every mutation ends with one `sync` refresh signal to the `ops-board` room;
subscribers respond by re-fetching the board snapshot. Presence events are
informational only.
"""
import threading

import structlog
from flask import request
from flask_socketio import join_room, emit

from auth import verify_session_token
from constants import (
    BOARD_ROOM,
    EVENT_SYNC,
    EVENT_JOIN,
    EVENT_UPDATE,
    EVENT_USER_JOINED,
    EVENT_USER_LEFT,
    EVENT_AUTH_ERROR,
    REFRESH_SIGNAL,
)
from metrics import board_broadcasts_total, socket_connections, socket_board_members

logger = structlog.get_logger('realtime')


class BoardBroadcaster:
    """Owns the board room membership and the refresh signal."""

    def __init__(self, socketio):
        self.socketio = socketio
        self._members = {}
        self._lock = threading.Lock()

    def notify_board_changed(self, reason='mutation'):
        """Fire-and-forget: a failed emit is logged, never raised to the writer."""
        try:
            self.socketio.emit(EVENT_SYNC, dict(REFRESH_SIGNAL), to=BOARD_ROOM)
        except Exception as e:
            logger.error("Board refresh broadcast failed", reason=reason, error=str(e))
            return False
        board_broadcasts_total.labels(reason=reason).inc()
        return True

    def add_member(self, sid, name):
        with self._lock:
            self._members[sid] = name
            socket_board_members.set(len(self._members))

    def remove_member(self, sid):
        with self._lock:
            name = self._members.pop(sid, None)
            socket_board_members.set(len(self._members))
        return name

    def is_member(self, sid):
        with self._lock:
            return sid in self._members

    def member_names(self):
        with self._lock:
            return sorted(self._members.values())


def register_socket_handlers(socketio, broadcaster):
    """SocketIO event handlers for the board channel"""

    @socketio.on('connect')
    def handle_connect(auth=None):
        socket_connections.inc()
        logger.info("Client connected", sid=request.sid)

    @socketio.on(EVENT_JOIN)
    def handle_join_board(token=None):
        user = verify_session_token(token)
        if user is None:
            logger.warning("Rejected board join", sid=request.sid)
            emit(EVENT_AUTH_ERROR, 'Invalid token')
            return

        join_room(BOARD_ROOM)
        broadcaster.add_member(request.sid, user.name)
        logger.info(f"{user.name} joined {BOARD_ROOM}", sid=request.sid, members=broadcaster.member_names())
        emit(EVENT_USER_JOINED, {'name': user.name}, to=BOARD_ROOM, include_self=False)

    @socketio.on(EVENT_UPDATE)
    def handle_client_update(data=None):
        # A joined client nudging everyone else to refresh; its payload is not relayed
        if not broadcaster.is_member(request.sid):
            logger.debug("Ignoring update from socket outside the board", sid=request.sid)
            return
        emit(EVENT_SYNC, dict(REFRESH_SIGNAL), to=BOARD_ROOM, include_self=False)

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        socket_connections.dec()
        name = broadcaster.remove_member(request.sid)
        if name:
            emit(EVENT_USER_LEFT, {'name': name}, to=BOARD_ROOM)
        logger.info("Client disconnected", sid=request.sid)
