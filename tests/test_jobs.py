"""Test the daily housekeeping jobs."""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from models import Billing, LeaseAgreement
from services.jobs import build_scheduler, run_lease_expiry_job, run_overdue_billing_job


def test_overdue_billing_job(db, rental, active_lease, unpaid_bill):
    past_due = Billing(
        billing_id="UPKYPBILL000009",
        lease_id=active_lease,
        unit_id=rental.unit_id,
        billing_period=date.today() - timedelta(days=40),
        total_amount_due=Decimal("12000.00"),
        due_date=date.today() - timedelta(days=1),
        status="unpaid",
    )
    db.add(past_due)
    db.commit()

    assert run_overdue_billing_job() == 1
    assert run_overdue_billing_job() == 0

    db.expire_all()
    assert db.get(Billing, "UPKYPBILL000009").status == "overdue"
    assert db.get(Billing, unpaid_bill).status == "unpaid"


def test_lease_expiry_job(db, ended_lease):
    assert run_lease_expiry_job() == 1

    db.expire_all()
    assert db.get(LeaseAgreement, ended_lease).status == "expired"


def test_lease_expiry_job_leaves_running_leases(db, active_lease):
    assert run_lease_expiry_job() == 0


def test_scheduler_registers_daily_jobs():
    scheduler = build_scheduler()
    assert {job.id for job in scheduler.get_jobs()} == {"overdue_billings", "expire_leases"}


@pytest.mark.asyncio
async def test_lifespan_runs_scheduler_when_enabled(monkeypatch):
    import main
    from services import jobs

    calls = []

    class RecordingScheduler:
        def start(self):
            calls.append("start")

        def shutdown(self, wait=True):
            calls.append(("shutdown", wait))

    monkeypatch.setattr(main, "SCHEDULER_ENABLED", True)
    monkeypatch.setattr(jobs, "build_scheduler", RecordingScheduler)

    async with main.lifespan(main.app):
        assert isinstance(main.app.state.scheduler, RecordingScheduler)
        assert calls == ["start"]
    assert calls == ["start", ("shutdown", False)]


@pytest.mark.asyncio
async def test_lifespan_without_scheduler(monkeypatch):
    import main

    monkeypatch.setattr(main, "SCHEDULER_ENABLED", False)
    async with main.lifespan(main.app):
        assert main.app.state.scheduler is None
