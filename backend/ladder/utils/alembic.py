import fcntl
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic.config import Config

from alembic import command
from ladder.utils.logging import logger

BACKEND_DIR = Path(__file__).resolve().parents[2]
MIGRATION_LOCK_PATH = Path(tempfile.gettempdir()) / "ladder-alembic.lock"


@contextmanager
def _migration_lock() -> Iterator[None]:
    """
    Multiple workers may start at once; only one of them should run the upgrade at a time.
    """
    with MIGRATION_LOCK_PATH.open("w", encoding="utf-8") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def get_alembic_config() -> Config:
    alembic_config = Config(str(BACKEND_DIR / "alembic.ini"))
    alembic_config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return alembic_config


def alembic_run_migrations() -> None:
    with _migration_lock():
        logger.info("Upgrading ladder schema to the latest revision")
        command.upgrade(get_alembic_config(), "head")
