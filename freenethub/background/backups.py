"""Snapshots of the JSON database file.

구조:
- {BACKUP_DIR}/db-{UTC timestamp}.json
- 파일 이름이 시간순으로 정렬되므로 최신 N개만 남기고 정리
"""
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from freenethub.adapters import json_db
from freenethub.adapters.json_db import JsonDatabase
from freenethub.server.settings import settings

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "db-"


def backup_dir() -> Path:
    return Path(settings.BACKUP_DIR)


def list_backups() -> List[Path]:
    """스냅샷 목록 (오래된 것부터)"""
    directory = backup_dir()
    if not directory.exists():
        return []
    return sorted(directory.glob(f"{BACKUP_PREFIX}*.json"))


async def create_backup(database: Optional[JsonDatabase] = None) -> Optional[Path]:
    """현재 DB 파일을 스냅샷으로 복사
    
    DB 파일은 항상 os.replace로 교체되므로 복사 중에 반쯤 쓰인 파일을 읽을 일은 없습니다.
    
    Returns:
        생성된 스냅샷 경로, DB 파일이 아직 없으면 None
    """
    source = (database or json_db.db).path
    if not source.exists():
        logger.info(f"Backup skipped: {source} does not exist yet")
        return None

    directory = backup_dir()
    directory.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    target = directory / f"{BACKUP_PREFIX}{stamp}.json"
    suffix = 1
    while target.exists():
        target = directory / f"{BACKUP_PREFIX}{stamp}-{suffix}.json"
        suffix += 1
    shutil.copy2(source, target)

    logger.info(f"Database backed up to {target}")
    return target


async def cleanup_old_backups(keep: Optional[int] = None) -> int:
    """최신 keep개를 제외한 스냅샷 삭제
    
    Returns:
        삭제된 파일 수
    """
    keep = settings.BACKUP_KEEP if keep is None else keep
    snapshots = list_backups()
    stale = snapshots[:-keep] if keep > 0 else snapshots

    removed = 0
    for path in stale:
        try:
            path.unlink()
            removed += 1
        except OSError as e:
            logger.error(f"Failed to delete backup {path}: {e}")

    logger.info(f"Backup cleanup: kept {len(snapshots) - removed}, removed {removed}")
    return removed
