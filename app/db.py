from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy import event, inspect
from sqlalchemy.exc import SQLAlchemyError
from alembic.runtime.migration import MigrationContext
from alembic.config import Config
from alembic import command
from datetime import timedelta
import sqlite3
import logging
from constants import ALEMBIC_DIR, ALEMBIC_CONF, DEFAULT_BOARD_SETTINGS, ROLE_ADMIN
from utils import now_utc
from exceptions import DatabaseException

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()
migrate = Migrate()


# Alembic functions
def get_alembic_cfg():
    cfg = Config(ALEMBIC_CONF)
    cfg.set_main_option("script_location", ALEMBIC_DIR)
    return cfg


def get_current_db_version():
    with db.engine.connect() as connection:
        context = MigrationContext.configure(connection)
        return context.get_current_revision()


def _set_sqlite_pragma(dbapi_connection, connection_record):
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return

    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    # Enable WAL mode for better concurrent access
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous=NORMAL;")
    # Writers queue behind each other instead of failing
    cursor.execute("PRAGMA busy_timeout=30000;")
    cursor.close()


def init_db(app):
    """Create the schema if needed and seed a fresh board.

    Safe to run on every startup. Any failure to reach the store propagates so
    the process never starts serving without one.
    """
    import models  # noqa: F401  (register tables on the metadata)

    with app.app_context():
        if not event.contains(db.engine, "connect", _set_sqlite_pragma):
            event.listen(db.engine, "connect", _set_sqlite_pragma)
            # Connections opened before the listener existed miss the pragmas
            db.engine.dispose()

        try:
            fresh = not inspect(db.engine).has_table("users")
            db.create_all()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Cannot open the board store: {e}") from e
        if fresh:
            command.stamp(get_alembic_cfg(), "head")
            logger.info("Database created and stamped to the latest migration version.")
        else:
            logger.info(f"Database version is {get_current_db_version() or 'unversioned'}")

        seed_admin(app.config["ADMIN_NAME"], app.config["ADMIN_PIN"])
        seed_board_settings()
        if app.config.get("SEED_DEMO_DATA", True):
            seed_demo_rows()

        logger.info("Database initialized")


def seed_admin(name, pin):
    """Guarantee at least one admin account exists."""
    from repositories.user_repository import UserRepository
    from auth import hash_pin

    if UserRepository.count_admins() > 0:
        return None

    admin = UserRepository.create(name=name, pin_hash=hash_pin(pin), role=ROLE_ADMIN)
    logger.info(f"Default admin created (Name: {name})")
    return admin


def seed_board_settings():
    """Insert default board settings that are missing; existing values win."""
    from models import Setting

    existing = {row.key for row in Setting.query.with_entities(Setting.key).all()}
    missing = [(key, value) for key, value in DEFAULT_BOARD_SETTINGS if key not in existing]
    for key, value in missing:
        db.session.add(Setting(key=key, value=value))
    if missing:
        db.session.commit()


def seed_demo_rows():
    """Demo entries for an empty board."""
    from models import StockItem, MaintenanceTicket, Note

    if StockItem.query.count() > 0:
        return

    now = now_utc()
    db.session.add_all(
        [
            StockItem(
                category="out",
                item="Buffalo Mozzarella",
                detail="Supplier delivering tomorrow AM",
                severity="none",
                created_at=now - timedelta(hours=1),
            ),
            StockItem(
                category="low",
                item="House Sourdough",
                detail="~15 portions left, check proofing",
                severity="low",
                created_at=now - timedelta(minutes=30),
            ),
            MaintenanceTicket(
                item="Pizza Oven Left Deck",
                detail="Running slightly cool, rotate pies right",
                severity="maint",
                created_at=now - timedelta(hours=2),
            ),
            Note(text="Prep extra basil garnish for spritz service", created_at=now - timedelta(minutes=10)),
        ]
    )
    db.session.commit()
    logger.info("Sample data added")
