"""
Tests for the realtime board channel
"""
import pytest

from extensions import socketio
from conftest import ADMIN_NAME


def _events(sio_client, name):
    return [message for message in sio_client.get_received() if message['name'] == name]


@pytest.fixture
def board_client(app, client):
    """Factory for socket clients sharing the HTTP test client's app"""
    clients = []

    def _connect():
        sio_client = socketio.test_client(app, flask_test_client=client)
        clients.append(sio_client)
        return sio_client

    yield _connect

    for sio_client in clients:
        if sio_client.is_connected():
            sio_client.disconnect()


class TestJoinBoard:
    """join-board handshake"""

    def test_invalid_token_gets_auth_error(self, board_client):
        sio_client = board_client()
        sio_client.emit('join-board', 'forged-token')

        received = sio_client.get_received()
        assert [m['name'] for m in received] == ['auth-error']
        assert received[0]['args'][0] == 'Invalid token'

    def test_missing_token_gets_auth_error(self, board_client):
        sio_client = board_client()
        sio_client.emit('join-board')
        assert [m['name'] for m in sio_client.get_received()] == ['auth-error']

    def test_presence_is_announced_to_others(self, board_client, admin_token):
        first = board_client()
        first.emit('join-board', admin_token)
        assert first.get_received() == []

        second = board_client()
        second.emit('join-board', admin_token)

        joined = _events(first, 'user-joined')
        assert len(joined) == 1
        assert joined[0]['args'][0] == {'name': ADMIN_NAME}
        assert _events(second, 'user-joined') == []

        second.disconnect()
        left = _events(first, 'user-left')
        assert len(left) == 1
        assert left[0]['args'][0] == {'name': ADMIN_NAME}


class TestRefreshSignal:
    """One sync per mutation, to every joined client"""

    def test_http_mutation_reaches_joined_client_once(self, client, board_client, admin_token, auth_headers):
        watcher = board_client()
        watcher.emit('join-board', admin_token)
        watcher.get_received()

        response = client.post('/api/stock', json={'category': 'out', 'item': 'Burrata'}, headers=auth_headers)
        assert response.status_code == 201

        syncs = _events(watcher, 'sync')
        assert len(syncs) == 1
        assert syncs[0]['args'][0] == {'type': 'refresh'}

    def test_unjoined_client_hears_nothing(self, client, board_client, auth_headers):
        outsider = board_client()
        outsider.get_received()

        client.post('/api/notes', json={'text': 'Birthday table 12'}, headers=auth_headers)
        assert _events(outsider, 'sync') == []

    def test_rejected_write_sends_nothing(self, client, board_client, admin_token, auth_headers):
        watcher = board_client()
        watcher.emit('join-board', admin_token)
        watcher.get_received()

        client.post('/api/stock', json={'category': 'out'}, headers=auth_headers)
        assert _events(watcher, 'sync') == []

    def test_client_update_relays_to_others_only(self, board_client, admin_token):
        sender = board_client()
        sender.emit('join-board', admin_token)
        listener = board_client()
        listener.emit('join-board', admin_token)
        sender.get_received()
        listener.get_received()

        sender.emit('update', {'anything': 'ignored'})

        assert _events(sender, 'sync') == []
        syncs = _events(listener, 'sync')
        assert len(syncs) == 1
        assert syncs[0]['args'][0] == {'type': 'refresh'}

    def test_update_from_outsider_ignored(self, board_client, admin_token):
        listener = board_client()
        listener.emit('join-board', admin_token)
        listener.get_received()

        outsider = board_client()
        outsider.emit('update')
        assert _events(listener, 'sync') == []


class TestBroadcaster:
    """Fire-and-forget delivery"""

    def test_emit_failure_is_swallowed(self, monkeypatch):
        from socket_helper import BoardBroadcaster

        class BrokenSocketIO:
            def emit(self, *args, **kwargs):
                raise ConnectionError('message queue down')

        assert BoardBroadcaster(BrokenSocketIO()).notify_board_changed('stock:add') is False

    def test_membership(self):
        from socket_helper import BoardBroadcaster

        broadcaster = BoardBroadcaster(socketio)
        broadcaster.add_member('sid-1', 'Marta')
        broadcaster.add_member('sid-2', 'Ana')

        assert broadcaster.is_member('sid-1')
        assert broadcaster.member_names() == ['Ana', 'Marta']
        assert broadcaster.remove_member('sid-1') == 'Marta'
        assert broadcaster.remove_member('sid-1') is None
        assert not broadcaster.is_member('sid-1')
