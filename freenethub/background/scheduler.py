"""Background task scheduler using APScheduler.

스케줄러 관리:
- db_backup: BACKUP_INTERVAL_HOURS마다 실행 (DB 스냅샷)
- backup_cleanup: 1일마다 실행 (오래된 스냅샷 정리)
"""
import logging
from typing import Any, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from freenethub.background.tasks import backup_cleanup_task, db_backup_task
from freenethub.server.settings import settings

logger = logging.getLogger(__name__)

TASKS = {
    "db_backup": db_backup_task,
    "backup_cleanup": backup_cleanup_task,
}

# 전역 스케줄러 인스턴스
scheduler: Optional[AsyncIOScheduler] = None


def init_scheduler():
    """스케줄러 초기화 및 작업 등록"""
    global scheduler
    
    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return
    
    scheduler = AsyncIOScheduler()
    
    scheduler.add_job(
        db_backup_task,
        trigger=IntervalTrigger(hours=settings.BACKUP_INTERVAL_HOURS),
        id="db_backup",
        name="DB Backup",
        replace_existing=True,
        max_instances=1,  # 동시 실행 방지
        coalesce=True,    # 누락된 실행 병합
    )
    
    scheduler.add_job(
        backup_cleanup_task,
        trigger=IntervalTrigger(days=1),
        id="backup_cleanup",
        name="Backup Cleanup",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    
    logger.info("Scheduler initialized with 2 background tasks")


def start_scheduler():
    """스케줄러 시작"""
    if scheduler is None:
        init_scheduler()
    
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")
        
        for job in scheduler.get_jobs():
            logger.info(f"Job '{job.name}' next run: {job.next_run_time}")


def shutdown_scheduler():
    """스케줄러 종료"""
    global scheduler
    
    if scheduler and scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler shut down")
    scheduler = None


async def run_task_now(task_name: str) -> Any:
    """특정 작업을 즉시 실행 (수동 트리거)
    
    Args:
        task_name: "db_backup", "backup_cleanup"
    """
    logger.info(f"Manually triggering task: {task_name}")
    
    task = TASKS.get(task_name)
    if task is None:
        logger.error(f"Unknown task: {task_name}")
        return None
    return await task()
