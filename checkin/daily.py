"""Daily check-in — reports today's session and advances finished weeks.

Usage:
    python -m checkin.daily --once      # single run (for cron)
    python -m checkin.daily --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import logging

from forge_app import FilePlanGenerator, ForgeAppError, ForgeStore, PlanOrchestrator
from forge_engine.math.completion import completed_days_in_week

from checkin.config import (
    CHECKIN_HOUR,
    CHECKIN_MINUTE,
    FORGE_DATA_DIR,
    FORGE_MAX_PLAN_ATTEMPTS,
    FORGE_PLAN_DIR,
    FORGE_USER_ID,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _build_orchestrator() -> PlanOrchestrator:
    return PlanOrchestrator(
        generator=FilePlanGenerator(FORGE_PLAN_DIR),
        store=ForgeStore(FORGE_DATA_DIR),
        user_id=FORGE_USER_ID,
        max_plan_attempts=FORGE_MAX_PLAN_ATTEMPTS,
    )


def daily_job() -> None:
    """Execute one check-in: advance a finished week, then log today's session."""
    logger.info("Starting daily check-in for %s", FORGE_USER_ID)
    orchestrator = _build_orchestrator()

    # 1. Load stored data
    try:
        data = orchestrator.load()
    except ForgeAppError as exc:
        logger.error("Failed to load forge data: %s", exc)
        return
    if data is None or data.plan is None:
        logger.warning("No plan stored for %s, nothing to check in", FORGE_USER_ID)
        return

    # 2. Advance the week when every day of it is done
    if orchestrator.can_advance_week(data):
        try:
            data = orchestrator.advance_week(data)
        except ForgeAppError as exc:
            logger.error("Failed to advance to week %d: %s", data.week_number + 1, exc)
            return
    else:
        logger.info(
            "Week %d: %d/7 sessions complete",
            data.week_number,
            completed_days_in_week(data.completed_workouts, data.current_week_start_date),
        )

    # 3. Report today's session
    week = orchestrator.aligned_week(data)
    if not week:
        logger.warning("Stored plan could not be aligned; regenerate it")
        return
    today = week[0]
    logger.info(
        "Today (%s): session %d of 7: %s",
        today.actual_day_name,
        today.session_number,
        today.focus,
    )
    logger.info("Daily check-in complete")


def main() -> None:
    parser = argparse.ArgumentParser(description="Forge daily check-in")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        daily_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            daily_job,
            "cron",
            hour=CHECKIN_HOUR,
            minute=CHECKIN_MINUTE,
            id="daily_checkin",
        )
        logger.info(
            "Scheduler started, daily check-in at %02d:%02d",
            CHECKIN_HOUR,
            CHECKIN_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
