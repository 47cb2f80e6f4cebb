# backend/storefront/services/backup_scheduler.py
"""
Scheduled backups.

Takes a backup on startup, then one every interval, keeping only the
newest N. Runs as an asyncio task in the app lifespan; the file work
happens in a thread (asyncio.to_thread).
"""

import asyncio
import logging

from .backups import BackupService

logger = logging.getLogger(__name__)


async def backup_loop(
    service: BackupService,
    interval_seconds: float,
    keep: int,
    run_on_start: bool = True,
) -> None:
    logger.info("backup_loop started (every %.0fs, keep %d)", interval_seconds, keep)

    try:
        if not run_on_start:
            await asyncio.sleep(interval_seconds)
        while True:
            try:
                await asyncio.to_thread(run_scheduled_backup, service, keep)
            except asyncio.CancelledError:
                logger.info("backup_loop cancelled")
                raise
            except Exception:
                logger.exception("backup_loop error")

            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        pass


def run_scheduled_backup(service: BackupService, keep: int) -> str:
    backup_id = service.create()
    service.prune(keep)
    logger.info("Automatic backup %s created", backup_id)
    return backup_id
