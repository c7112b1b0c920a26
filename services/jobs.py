# services/jobs.py
"""
Daily housekeeping jobs run by APScheduler when SCHEDULER_ENABLED=true.
"""
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from database import get_session_context
from services.billing_service import BillingService
from services.lease_service import expire_ended_leases

logger = logging.getLogger(__name__)


def run_overdue_billing_job() -> int:
     with get_session_context() as db:
          return BillingService.mark_overdue_billings(db)


def run_lease_expiry_job() -> int:
     with get_session_context() as db:
          return expire_ended_leases(db)


def build_scheduler() -> BackgroundScheduler:
     scheduler = BackgroundScheduler(timezone="Asia/Manila")
     scheduler.add_job(run_overdue_billing_job, "cron", hour=0, minute=5, id="overdue_billings")
     scheduler.add_job(run_lease_expiry_job, "cron", hour=0, minute=10, id="expire_leases")
     return scheduler
