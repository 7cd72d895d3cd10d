"""
Background scheduler for goal maintenance.
Handles:
- Periodic recheck of pending goals against current habit streaks
"""

import logging
import os
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from habitflow.database import SessionLocal
from habitflow.services.goal_service import GoalService
from habitflow.constants import DEFAULT_GOAL_RECHECK_MINUTES

logger = logging.getLogger("habitflow.scheduler")

GOAL_RECHECK_ENABLED = os.getenv("HABITFLOW_GOAL_RECHECK_ENABLED", "true").lower() in ("1", "true", "yes")
GOAL_RECHECK_MINUTES = int(os.getenv("HABITFLOW_GOAL_RECHECK_MINUTES", DEFAULT_GOAL_RECHECK_MINUTES))

scheduler = AsyncIOScheduler()


async def run_goal_recheck():
    """Job: complete pending goals whose habit streak reached the target"""
    db = SessionLocal()
    try:
        completed = GoalService(db).recheck_all_goals()
        if completed:
            logger.info(f"Goal recheck completed {completed} goal(s)")
    except Exception as e:
        db.rollback()
        logger.error(f"Scheduler Error (Goal Recheck): {e}")
    finally:
        db.close()


def start_scheduler():
    """Start the scheduler if goal rechecks are enabled"""
    if not GOAL_RECHECK_ENABLED:
        logger.info("Goal recheck disabled, scheduler not started")
        return
    if not scheduler.running:
        scheduler.add_job(
            run_goal_recheck,
            IntervalTrigger(minutes=GOAL_RECHECK_MINUTES),
            id="goal_recheck",
            replace_existing=True
        )
        scheduler.start()
        logger.info(f"APScheduler started, goal recheck every {GOAL_RECHECK_MINUTES} min")


def stop_scheduler():
    """Stop the scheduler"""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("APScheduler stopped")
