from __future__ import annotations

import importlib
import logging
import signal
from types import ModuleType

from dotenv import load_dotenv

from config import get_settings_module

from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_POOL_SIZE
from .core.settings import DailyTaskSettings
from .database.bootstrap import SCHEMA_PATH, apply_schema, list_tables

logger = logging.getLogger(__name__)


def load_settings() -> ModuleType:
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_container(settings: ModuleType | None = None) -> Container:
    """Load settings, set up logging and the schema, and wire everything.

    Raises ConfigurationError on a bad timezone or trigger time so the
    process never starts with undefined timing.
    """
    settings = settings or load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    task_settings = DailyTaskSettings.from_module(settings)
    db_config = dict(getattr(settings, "DB_CONFIG"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s timezone=%s trigger=%s",
        settings.__name__,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        task_settings.timezone.key,
        task_settings.trigger_time.isoformat(),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=getattr(settings, "SCHEMA_PATH", None) or SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    return build_container(
        db_config=db_config,
        task_settings=task_settings,
        pool_size=int(getattr(settings, "DB_POOL_SIZE", DEFAULT_POOL_SIZE)),
    )


def run() -> None:
    container = create_container()
    scheduler = container.scheduler

    def _shutdown(signum, _frame):
        logger.info("Received signal %s, stopping", signum)
        scheduler.stop()

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)

    logger.info("Starting daily attendance scheduler...")
    scheduler.run_forever()


if __name__ == "__main__":
    run()
