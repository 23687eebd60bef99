from constants import *
from exceptions import ConfigurationException
import copy
import re
import yaml
import os

import logging

# Retrieve main logger
logger = logging.getLogger("main")

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}

# (section, key, environment variable, caster)
ENV_OVERRIDES = [
    ("server", "port", "PORT", int),
    ("server", "secret_key", "SECRET_KEY", str),
    ("server", "secret_key", "JWT_SECRET", str),
    ("server", "session_expiry", "SESSION_EXPIRY", str),
    ("server", "socketio_async_mode", "SOCKETIO_ASYNC_MODE", str),
    ("server", "redis_url", "REDIS_URL", str),
    ("server", "ratelimit_default", "RATELIMIT_DEFAULT", str),
    ("database", "path", "DB_PATH", str),
    ("database", "url", "DATABASE_URL", str),
    ("database", "seed_demo_data", "SEED_DEMO_DATA", lambda v: v.strip().lower() in ("1", "true", "yes", "on")),
    ("admin", "name", "ADMIN_NAME", str),
    ("admin", "pin", "ADMIN_PIN", str),
    ("jobs", "note_expiry_sweep_seconds", "NOTE_EXPIRY_SWEEP_SECONDS", int),
]


def parse_duration(value):
    """Convert '90s', '30m', '24h', '7d' or a bare number of seconds to seconds."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = int(value)
    else:
        match = _DURATION_RE.match(str(value or ""))
        if not match:
            raise ConfigurationException(f"Invalid duration: {value!r}")
        seconds = int(match.group(1)) * _DURATION_UNITS[match.group(2)]
    if seconds <= 0:
        raise ConfigurationException(f"Duration must be positive: {value!r}")
    return seconds


def _merge(base, overrides):
    merged = copy.deepcopy(base)
    for section, values in (overrides or {}).items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def load_settings(config_file=CONFIG_FILE, environ=None):
    """Defaults, then the YAML config file, then environment variables."""
    environ = os.environ if environ is None else environ
    settings = copy.deepcopy(DEFAULT_SETTINGS)

    if config_file and os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            settings = _merge(settings, yaml.safe_load(yaml_file) or {})

    for section, key, env_name, caster in ENV_OVERRIDES:
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            settings.setdefault(section, {})[key] = caster(raw)
        except ValueError:
            raise ConfigurationException(f"Invalid value for {env_name}: {raw!r}")

    return settings


def database_uri(settings):
    url = settings["database"].get("url")
    if url:
        return url
    path = settings["database"]["path"]
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    return "sqlite:///" + os.path.abspath(path)


def build_flask_config(settings):
    """Translate merged settings into Flask config keys."""
    server = settings["server"]
    redis_url = server.get("redis_url")
    return {
        "SQLALCHEMY_DATABASE_URI": database_uri(settings),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "SECRET_KEY": server.get("secret_key"),
        "SESSION_EXPIRY_SECONDS": parse_duration(server.get("session_expiry", "24h")),
        "PORT": int(server.get("port", 3000)),
        "SOCKETIO_ASYNC_MODE": server.get("socketio_async_mode"),
        "SOCKETIO_MESSAGE_QUEUE": redis_url,
        "RATELIMIT_DEFAULT": server.get("ratelimit_default"),
        "RATELIMIT_STORAGE_URI": redis_url or "memory://",
        "SEED_DEMO_DATA": bool(settings["database"].get("seed_demo_data", True)),
        "ADMIN_NAME": settings["admin"]["name"],
        "ADMIN_PIN": str(settings["admin"]["pin"]),
        "NOTE_EXPIRY_SWEEP_SECONDS": int(settings["jobs"].get("note_expiry_sweep_seconds") or 0),
    }
