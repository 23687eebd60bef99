import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(APP_DIR, 'data')
CONFIG_DIR = os.environ.get('OPSBOARD_CONFIG_DIR', os.path.join(APP_DIR, 'config'))
DB_FILE = os.path.join(DATA_DIR, 'opsboard.db')
CONFIG_FILE = os.environ.get('OPSBOARD_CONFIG', os.path.join(CONFIG_DIR, 'settings.yaml'))
ALEMBIC_DIR = os.path.join(APP_DIR, 'migrations')
ALEMBIC_CONF = os.path.join(ALEMBIC_DIR, 'alembic.ini')

BUILD_VERSION = '20261017_0900'

# Realtime fan-out
BOARD_ROOM = 'ops-board'
EVENT_SYNC = 'sync'
EVENT_JOIN = 'join-board'
EVENT_UPDATE = 'update'
EVENT_USER_JOINED = 'user-joined'
EVENT_USER_LEFT = 'user-left'
EVENT_AUTH_ERROR = 'auth-error'
REFRESH_SIGNAL = {'type': 'refresh'}

# Domain vocabulary
STOCK_CATEGORIES = ('out', 'low')
SEVERITIES = ('none', 'low', 'maint')
ROLES = ('admin', 'staff')
ROLE_ADMIN = 'admin'
ROLE_STAFF = 'staff'

DEFAULT_STOCK_SEVERITY = 'low'
DEFAULT_MAINT_SEVERITY = 'maint'
DEFAULT_MAINT_PRIORITY = 2

ENTITY_STOCK = 'stock'
ENTITY_MAINTENANCE = 'maintenance'
ENTITY_SHIFT = 'shift'

ACTION_ADD = 'add'
ACTION_RESOLVE = 'resolve'
ACTION_DELETE = 'delete'

SHIFT_LOG_LIMIT = 20
SHIFT_LOG_MAX_LIMIT = 100
ACTIVITY_LOG_LIMIT = 50
ACTIVITY_LOG_MAX_LIMIT = 200
EXPORT_SHIFT_ENTRIES = 5
MIN_PIN_LENGTH = 4
MAX_NOTE_EXPIRY_MINUTES = 60 * 24 * 365

SESSION_SALT = 'opsboard-session'

DEFAULT_BOARD_SETTINGS = [
    ('restaurant_name', 'Basil & Grape'),
    ('address', '46-48 George Street, Croydon, CR0 1PB'),
    ('phone', '020 8680 1801'),
    ('floor_lead', 'Update name'),
    ('opening_hours', 'Tue-Thu 12-22:00 | Fri-Sat 12-23:00 | Sun 12-21:00'),
    ('website', 'https://basilandgrape.com'),
]

DEFAULT_SETTINGS = {
    "server": {
        "port": 3000,
        "secret_key": None,
        "session_expiry": "24h",
        "socketio_async_mode": None,
        "redis_url": None,
        "ratelimit_default": "200 per 15 minutes",
    },
    "database": {
        "path": DB_FILE,
        "url": None,
        "seed_demo_data": True,
    },
    "admin": {
        "name": "Head Chef",
        "pin": "1234",
    },
    "jobs": {
        "note_expiry_sweep_seconds": 60,
    },
}
