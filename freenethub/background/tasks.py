"""Background maintenance tasks.

백그라운드 작업:
1. db_backup_task: DB 파일 스냅샷 생성
2. backup_cleanup_task: 오래된 스냅샷 정리 (BACKUP_KEEP개 유지)
"""
import logging
from pathlib import Path
from typing import Optional

from freenethub.background import backups

logger = logging.getLogger(__name__)


async def db_backup_task() -> Optional[Path]:
    logger.info("=== Starting DB backup task ===")
    try:
        return await backups.create_backup()
    except OSError as e:
        logger.error(f"DB backup task failed: {e}")
        return None


async def backup_cleanup_task() -> int:
    logger.info("=== Starting backup cleanup task ===")
    return await backups.cleanup_old_backups()
