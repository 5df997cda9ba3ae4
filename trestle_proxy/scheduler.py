# trestle_proxy/scheduler.py
import logging
from datetime import timezone
from apscheduler.schedulers.background import BackgroundScheduler

from .config import ProxyConfig


def run_scheduled_task():
    # Placeholder: nothing to maintain yet.
    logging.info("Scheduled task triggered")


def start_scheduler(config: ProxyConfig):
    if not config.enable_scheduler:
        logging.info("Scheduler disabled (ENABLE_SCHEDULER!=1).")
        return None
    try:
        sched = BackgroundScheduler(timezone=timezone.utc)
        sched.add_job(run_scheduled_task, "interval", hours=config.scheduler_interval_hours,
                      id="trestle_proxy_task", replace_existing=True)
        sched.start()
        logging.info("Scheduler started (%dh interval).", config.scheduler_interval_hours)
        return sched
    except Exception as e:
        logging.exception("Failed to start scheduler: %s", e)
        return None
