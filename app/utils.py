import logging
import os
import re
import secrets
from datetime import datetime, timezone

logger = logging.getLogger('main')

SENSITIVE_KEYS = ('pin', 'password', 'secret', 'token', 'authorization')


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name"""
    COLORS = {
        'DEBUG': '\033[94m',
        'INFO': '\033[92m',
        'WARNING': '\033[93m',
        'ERROR': '\033[91m',
        'CRITICAL': '\033[95m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class FilterRemoveDateFromWerkzeugLogs(logging.Filter):
    # '10.0.0.7 - - [17/Oct/2026 09:00:00] "GET /api/board HTTP/1.1" 200 -' -> '10.0.0.7 - "GET /api/board HTTP/1.1" 200 -'
    pattern: re.Pattern = re.compile(r' - - \[.+?] "')

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.pattern.sub(' - "', record.msg)
        return True


def get_or_create_secret_key(config_dir):
    """
    Token signing key for deployments that set neither SECRET_KEY nor JWT_SECRET.

    Persisted as config_dir/.secret_key (mode 0600) so issued session tokens
    survive a restart. Falls back to an in-memory key if the file can't be written.
    """
    key_file = os.path.join(config_dir, '.secret_key')

    if os.path.exists(key_file):
        with open(key_file, 'r') as f:
            key = f.read().strip()
        if len(key) == 64:
            return key
        logger.warning("Ignoring malformed secret key file")

    key = secrets.token_hex(32)
    try:
        os.makedirs(config_dir, exist_ok=True)
        with open(key_file, 'w') as f:
            f.write(key)
        os.chmod(key_file, 0o600)
        logger.info(f"Generated new secret key in {key_file}")
    except OSError as e:
        logger.warning(f"Could not persist secret key ({e}); sessions end on restart")

    return key


def sanitize_sensitive_data(data):
    """Copy of a JSON payload with credential-looking values masked, for logging."""
    if isinstance(data, dict):
        return {
            k: "***" if any(s in str(k).lower() for s in SENSITIVE_KEYS) else sanitize_sensitive_data(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [sanitize_sensitive_data(item) for item in data]
    return data


def now_utc():
    return datetime.now(timezone.utc)


def ensure_utc(value):
    """
    Aware UTC datetime from a datetime or ISO-8601 string; naive values are
    taken as UTC (SQLite hands them back that way). None for anything else.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat(dt):
    dt = ensure_utc(dt)
    return dt.isoformat() if dt else None


def slugify(text):
    return re.sub(r'[^a-z0-9]+', '-', (text or '').lower()).strip('-') or 'board'
