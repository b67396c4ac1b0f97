"""
Console entry point for Habit Logger

Startup order:
1. Configure logging from settings
2. Open the database (fatal if it cannot be opened)
3. Create the Habit table if missing
4. Seed sample habits into an empty table (optional)
5. Run the menu until the user exits

The connection is closed on every exit path.
"""

import sys
from typing import Callable, Optional

import structlog

from habit_logger.audit import configure_logging
from habit_logger.config import Settings, get_settings
from habit_logger.orchestrator import create_app_components
from habit_logger.services.seed import HabitSeedService
from habit_logger.services.storage import ConnectionError, StorageError


logger = structlog.get_logger(__name__)


def seed_database(
    seed_service: HabitSeedService,
    count: int,
    write: Callable[[str], None] = print,
) -> int:
    """Seed an empty table, reporting (not raising) any failure."""
    try:
        if not seed_service.is_empty():
            return 0
        write("Database is empty. Seeding with initial data...")
        return seed_service.seed_if_empty(count)
    except StorageError as e:
        logger.error("seed_failed", error=str(e))
        write(f"Could not create sample data: {e}")
        return 0


def main(
    settings: Optional[Settings] = None,
    read_line: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> int:
    settings = settings or get_settings()
    read_line = read_line or input
    write = write or print
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level, app_settings.log_file)

    client, storage, seed_service, app = create_app_components(
        settings, read_line=read_line, write=write
    )

    try:
        with client:
            storage.ensure_schema()
            if storage_settings.seed_on_empty:
                seed_database(seed_service, storage_settings.seed_count, write)
            app.run()
    except (ConnectionError, StorageError) as e:
        # Nothing works without the database
        logger.critical("startup_failed", error=str(e))
        print(f"Fatal: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
