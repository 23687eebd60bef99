"""
Tests for the board domain operations
"""
from datetime import timedelta

import pytest

from exceptions import ValidationException
from db import db
from models.setting import Setting
from utils import ensure_utc, now_utc


class TestStockItems:
    """Adding, listing and resolving out/low stock"""

    def test_add_lists_newest_first(self, service, admin_id):
        first = service.add_stock_item('out', 'Burrata', 'Back tomorrow', 'none', admin_id)
        second = service.add_stock_item('out', 'Anchovies', None, None, admin_id)

        items = service.list_stock('out')
        assert [i['id'] for i in items] == [second, first]
        assert items[1]['detail'] == 'Back tomorrow'
        assert items[0]['severity'] == 'low'
        assert all(i['is_active'] for i in items)

    def test_categories_are_separate(self, service, admin_id):
        service.add_stock_item('low', 'Pecorino', actor_id=admin_id)
        assert service.list_stock('out') == []
        assert len(service.list_stock('low')) == 1

    def test_missing_item_rejected(self, service):
        with pytest.raises(ValidationException, match='Category and item required'):
            service.add_stock_item('out', '   ')
        with pytest.raises(ValidationException, match='Category and item required'):
            service.add_stock_item(None, 'Burrata')

    def test_invalid_category_rejected(self, service):
        with pytest.raises(ValidationException, match='Invalid category'):
            service.add_stock_item('gone', 'Burrata')
        with pytest.raises(ValidationException, match='Invalid category'):
            service.list_stock('gone')

    def test_invalid_severity_rejected(self, service):
        with pytest.raises(ValidationException):
            service.add_stock_item('out', 'Burrata', severity='critical')

    def test_resolve_hides_item_but_keeps_history(self, service, admin_id):
        item_id = service.add_stock_item('out', 'Burrata', actor_id=admin_id)

        assert service.resolve_stock_item(item_id, admin_id) == 1
        assert service.list_stock('out') == []

        history = service.list_stock('out', active_only=False)
        assert history[0]['id'] == item_id
        assert history[0]['is_active'] is False
        assert history[0]['resolved_at'] is not None

    def test_resolve_is_idempotent(self, service, admin_id):
        item_id = service.add_stock_item('out', 'Burrata', actor_id=admin_id)
        service.resolve_stock_item(item_id, admin_id)
        resolved_at = service.list_stock('out', active_only=False)[0]['resolved_at']

        assert service.resolve_stock_item(item_id, admin_id) == 0
        assert service.list_stock('out', active_only=False)[0]['resolved_at'] == resolved_at

    def test_resolve_unknown_id_is_silent(self, service, broadcaster, admin_id):
        assert service.resolve_stock_item(99999, admin_id) == 0
        assert broadcaster.reasons == ['stock:resolve']


class TestMaintenance:
    """Maintenance tickets"""

    def test_defaults(self, service, admin_id):
        ticket_id = service.add_maintenance_item('Walk-in fridge', 'Door seal worn', actor_id=admin_id)
        ticket = service.list_maintenance()[0]
        assert ticket['id'] == ticket_id
        assert ticket['severity'] == 'maint'
        assert ticket['priority'] == 2

    def test_priority_orders_active_list(self, service, admin_id):
        low = service.add_maintenance_item('Dish pit drain', priority=3, actor_id=admin_id)
        urgent = service.add_maintenance_item('Gas hob', priority=1, actor_id=admin_id)
        assert [t['id'] for t in service.list_maintenance()] == [urgent, low]

    def test_item_required(self, service):
        with pytest.raises(ValidationException, match='Item required'):
            service.add_maintenance_item('')

    def test_bad_priority_rejected(self, service):
        with pytest.raises(ValidationException):
            service.add_maintenance_item('Gas hob', priority=0)
        with pytest.raises(ValidationException):
            service.add_maintenance_item('Gas hob', priority='high')

    def test_resolve(self, service, admin_id):
        ticket_id = service.add_maintenance_item('Gas hob', actor_id=admin_id)
        service.resolve_maintenance_item(ticket_id, admin_id)
        assert service.list_maintenance() == []
        assert service.list_maintenance(active_only=False)[0]['is_active'] is False


class TestNotes:
    """Free-text notes"""

    def test_add_and_resolve(self, service, admin_id):
        note_id = service.add_note('Extra basil for spritz service', admin_id)
        assert service.list_notes()[0]['text'] == 'Extra basil for spritz service'
        service.resolve_note(note_id, admin_id)
        assert service.list_notes() == []

    def test_text_required(self, service):
        with pytest.raises(ValidationException, match='Text required'):
            service.add_note('  ')

    def test_notes_are_not_audited(self, service, admin_id):
        note_id = service.add_note('Quiet night', admin_id)
        service.resolve_note(note_id, admin_id)
        assert service.get_activity_log() == []

    def test_expiry_must_be_in_future(self, service):
        with pytest.raises(ValidationException, match='future'):
            service.add_note('Stale', expires_at=now_utc() - timedelta(minutes=1))

    def test_expire_notes(self, service, broadcaster, admin_id):
        service.add_note('Short lived', admin_id, expires_at=now_utc() + timedelta(minutes=5))
        service.add_note('Stays', admin_id)
        broadcaster.reasons.clear()

        assert service.expire_notes(now_utc()) == 0
        assert broadcaster.reasons == []

        assert service.expire_notes(now_utc() + timedelta(minutes=10)) == 1
        assert [n['text'] for n in service.list_notes()] == ['Stays']
        assert broadcaster.reasons == ['note:expire']


class TestShiftLog:
    """Shift handover entries"""

    def test_add_lists_newest_first_with_author(self, service, admin_id):
        service.add_shift_entry('AM', 'Prep focaccia', '11:00', None, admin_id)
        service.add_shift_entry('PM', 'Pasta station', None, 'Short one cook', admin_id)

        entries = service.list_shift_log()
        assert [e['shift_type'] for e in entries] == ['PM', 'AM']
        assert entries[0]['created_by_name'] == 'Head Chef'
        assert entries[0]['eta'] == ''
        assert entries[1]['eta'] == '11:00'

    def test_limit(self, service, admin_id):
        for i in range(5):
            service.add_shift_entry('AM', f'Focus {i}', actor_id=admin_id)
        assert len(service.list_shift_log(limit=3)) == 3

    def test_type_and_focus_required(self, service):
        with pytest.raises(ValidationException, match='Shift type and focus required'):
            service.add_shift_entry('AM', '')

    def test_delete_removes_row(self, service, admin_id):
        entry_id = service.add_shift_entry('AM', 'Prep', actor_id=admin_id)
        assert service.delete_shift_entry(entry_id, admin_id) == 1
        assert service.list_shift_log() == []
        assert service.delete_shift_entry(entry_id, admin_id) == 0


class TestSettings:
    """Board key/value settings"""

    def test_defaults_seeded(self, service):
        settings = service.list_settings()
        assert settings['restaurant_name'] == 'Basil & Grape'
        assert 'floor_lead' in settings

    def test_upsert_overwrites(self, service, monkeypatch):
        stamp = now_utc()
        monkeypatch.setattr('repositories.setting_repository.now_utc', lambda: stamp)
        service.set_setting('floor_lead', 'Marta')
        monkeypatch.setattr('repositories.setting_repository.now_utc', lambda: stamp + timedelta(minutes=5))
        service.set_setting('floor_lead', 'Sam')
        db.session.expire_all()

        rows = Setting.query.filter_by(key='floor_lead').all()
        assert len(rows) == 1
        assert rows[0].value == 'Sam'
        assert ensure_utc(rows[0].updated_at) == stamp + timedelta(minutes=5)
        assert service.get_setting('floor_lead') == 'Sam'

    def test_new_key(self, service):
        service.set_setting('wifi', 'basil-guest')
        assert service.list_settings()['wifi'] == 'basil-guest'

    def test_value_required(self, service):
        with pytest.raises(ValidationException):
            service.set_setting('floor_lead', None)
        with pytest.raises(ValidationException):
            service.set_setting('floor_lead', {'name': 'Sam'})

    def test_settings_not_audited(self, service):
        service.set_setting('floor_lead', 'Sam')
        assert service.get_activity_log() == []


class TestAuditTrail:
    """Activity log written alongside mutations"""

    def test_mutations_are_audited_newest_first(self, service, admin_id):
        item_id = service.add_stock_item('out', 'Burrata', actor_id=admin_id)
        service.resolve_stock_item(item_id, admin_id)

        log = service.get_activity_log()
        assert [e['action'] for e in log] == ['resolve', 'add']
        assert log[1]['details'] == 'Added out: Burrata'
        assert log[1]['entity_type'] == 'stock'
        assert log[1]['entity_id'] == item_id
        assert log[0]['user_name'] == 'Head Chef'

    def test_shift_entry_audit_detail(self, service, admin_id):
        service.add_shift_entry('Close', 'Deep clean fryers', actor_id=admin_id)
        assert service.get_activity_log()[0]['details'] == 'Shift handover: Close'

    def test_audit_failure_does_not_fail_write(self, service, broadcaster, admin_id, monkeypatch):
        from repositories.activitylog_repository import ActivityLogRepository

        def broken_create(**kwargs):
            raise RuntimeError('activity table locked')

        monkeypatch.setattr(ActivityLogRepository, 'create', staticmethod(broken_create))

        item_id = service.add_stock_item('out', 'Burrata', actor_id=admin_id)
        assert service.list_stock('out')[0]['id'] == item_id
        assert broadcaster.reasons == ['stock:add']

    def test_activity_limit(self, service, admin_id):
        for i in range(4):
            service.add_stock_item('low', f'Item {i}', actor_id=admin_id)
        assert len(service.get_activity_log(limit=2)) == 2


class TestBroadcast:
    """Every mutation ends with exactly one refresh"""

    def test_one_refresh_per_mutation(self, service, broadcaster, admin_id):
        item_id = service.add_stock_item('out', 'Burrata', actor_id=admin_id)
        service.resolve_stock_item(item_id, admin_id)
        service.add_maintenance_item('Gas hob', actor_id=admin_id)
        service.add_note('Busy night', admin_id)
        entry_id = service.add_shift_entry('AM', 'Prep', actor_id=admin_id)
        service.delete_shift_entry(entry_id, admin_id)
        service.set_setting('floor_lead', 'Sam')

        assert broadcaster.reasons == [
            'stock:add',
            'stock:resolve',
            'maintenance:add',
            'note:add',
            'shift:add',
            'shift:delete',
            'setting:set',
        ]

    def test_failed_validation_does_not_broadcast(self, service, broadcaster):
        with pytest.raises(ValidationException):
            service.add_stock_item('out', '')
        assert broadcaster.reasons == []


class TestSnapshot:
    """Aggregate board read"""

    def test_counts_match_lists(self, service, admin_id):
        service.add_stock_item('out', 'Burrata', actor_id=admin_id)
        service.add_stock_item('out', 'Anchovies', actor_id=admin_id)
        service.add_stock_item('low', 'Pecorino', actor_id=admin_id)
        service.add_maintenance_item('Gas hob', actor_id=admin_id)
        resolved = service.add_note('Gone soon', admin_id)
        service.add_note('Busy night', admin_id)
        service.resolve_note(resolved, admin_id)

        snapshot = service.get_board_snapshot()
        assert set(snapshot) == {'out', 'low', 'maint', 'notes', 'shiftLog', 'settings', 'stats'}
        assert snapshot['stats'] == {
            'outCount': len(snapshot['out']),
            'lowCount': len(snapshot['low']),
            'maintCount': len(snapshot['maint']),
            'notesCount': len(snapshot['notes']),
        }
        assert snapshot['stats']['outCount'] == 2
        assert snapshot['stats']['notesCount'] == 1

    def test_empty_board(self, service):
        snapshot = service.get_board_snapshot()
        assert snapshot['out'] == []
        assert snapshot['shiftLog'] == []
        assert snapshot['stats'] == {'outCount': 0, 'lowCount': 0, 'maintCount': 0, 'notesCount': 0}
        assert snapshot['settings']['restaurant_name'] == 'Basil & Grape'
