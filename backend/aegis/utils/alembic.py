import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine

from alembic import command
from aegis.config import config
from aegis.utils.logging import logger

BACKEND_DIR = Path(__file__).resolve().parents[2]


def sync_mysql_dsn() -> str:
    return config.mysql_dsn.replace("+aiomysql", "+pymysql")


@contextmanager
def _migration_lock() -> Iterator[None]:
    """Serializes migrations between workers started at the same time."""
    with open(config.migration_lock_path, "w", encoding="utf-8") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def get_alembic_config() -> Config:
    alembic_config = Config(str(BACKEND_DIR / "alembic.ini"))
    alembic_config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return alembic_config


def current_revision() -> str | None:
    engine = create_engine(sync_mysql_dsn())
    try:
        with engine.connect() as connection:
            return MigrationContext.configure(connection).get_current_revision()
    finally:
        engine.dispose()


def alembic_run_migrations() -> None:
    with _migration_lock():
        revision = current_revision()
        logger.info(f"Running migrations for the match tables, current revision: {revision}")
        command.upgrade(get_alembic_config(), "head")
