"""Initial Upkyp schema

Revision ID: 20261001_000001
Revises:
Create Date: 2026-10-01

Users and role profiles, properties and units, applications, leases with
signatures, deposits and renewals, PDCs, billing, payments with the hash
chained ledger, landlord payouts, maintenance, announcements,
notifications and the activity log.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261001_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated_required: bool = False):
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            server_default=sa.func.now() if updated_required else None,
            nullable=not updated_required,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("avatar", sa.String(500), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("pending_otp", sa.String(10), nullable=True),
        sa.Column("otp_expires_at", sa.DateTime(), nullable=True),
        sa.Column("timezone", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "landlords",
        sa.Column("landlord_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("landlord_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", name="uq_landlords_user_id"),
    )

    op.create_table(
        "tenants",
        sa.Column("tenant_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("contact_number", sa.String(50), nullable=True),
        sa.Column("street", sa.String(255), nullable=True),
        sa.Column("barangay", sa.String(100), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("province", sa.String(100), nullable=True),
        sa.Column("occupation_status", sa.String(100), nullable=True),
        sa.Column("employer_name", sa.String(255), nullable=True),
        sa.Column("monthly_income", sa.String(50), nullable=True),
        *_timestamps(updated_required=True),
        sa.PrimaryKeyConstraint("tenant_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", name="uq_tenants_user_id"),
    )

    op.create_table(
        "properties",
        sa.Column("property_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("property_name", sa.String(255), nullable=False),
        sa.Column("property_type", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("street", sa.String(255), nullable=True),
        sa.Column("barangay", sa.String(100), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("province", sa.String(100), nullable=True),
        sa.Column("zip_code", sa.String(10), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("property_id"),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.landlord_id"]),
    )
    op.create_index("ix_properties_landlord_id", "properties", ["landlord_id"])

    op.create_table(
        "units",
        sa.Column("unit_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("unit_name", sa.String(50), nullable=False),
        sa.Column("unit_size", sa.Numeric(10, 2), nullable=True),
        sa.Column("furnish", sa.String(50), nullable=True),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(updated_required=True),
        sa.PrimaryKeyConstraint("unit_id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.property_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_units_property_id", "units", ["property_id"])

    op.create_table(
        "prospective_tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("proceeded", sa.String(3), nullable=True),
        *_timestamps(updated_required=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.unit_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_prospective_tenants_unit_id", "prospective_tenants", ["unit_id"])
    op.create_index("ix_prospective_tenants_tenant_id", "prospective_tenants", ["tenant_id"])
    op.create_index("ix_prospective_tenants_status", "prospective_tenants", ["status"])

    op.create_table(
        "lease_agreements",
        sa.Column("agreement_id", sa.String(32), nullable=False),
        sa.Column("is_renewal_of", sa.String(32), nullable=True),
        sa.Column("tenant_id", sa.Integer(), nullable=True),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("lease_type", sa.String(20), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("security_deposit_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("advance_payment_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("billing_due_day", sa.Integer(), nullable=False),
        sa.Column("grace_period_days", sa.Integer(), nullable=False),
        sa.Column("late_penalty_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("is_security_deposit_paid", sa.Boolean(), nullable=False),
        sa.Column("is_advance_payment_paid", sa.Boolean(), nullable=False),
        sa.Column("agreement_url", sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("agreement_id"),
        sa.ForeignKeyConstraint(["is_renewal_of"], ["lease_agreements.agreement_id"]),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["unit_id"], ["units.unit_id"]),
    )
    op.create_index("ix_lease_agreements_tenant_id", "lease_agreements", ["tenant_id"])
    op.create_index("ix_lease_agreements_unit_id", "lease_agreements", ["unit_id"])
    op.create_index("ix_lease_agreements_status", "lease_agreements", ["status"])

    op.create_table(
        "lease_signatures",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("agreement_id", sa.String(32), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("otp_code", sa.String(10), nullable=True),
        sa.Column("otp_sent_at", sa.DateTime(), nullable=True),
        sa.Column("otp_expires_at", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("signed_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agreement_id"], ["lease_agreements.agreement_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("agreement_id", "role", name="uq_lease_signature_role"),
    )
    op.create_index("ix_lease_signatures_agreement_id", "lease_signatures", ["agreement_id"])

    for table, pk, extra in (
        ("security_deposits", "deposit_id", []),
        ("advance_payments", "advance_id", [sa.Column("months_covered", sa.Integer(), nullable=False)]),
    ):
        op.create_table(
            table,
            sa.Column(pk, sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("lease_id", sa.String(32), nullable=False),
            sa.Column("tenant_id", sa.Integer(), nullable=True),
            sa.Column("amount", sa.Numeric(12, 2), nullable=False),
            *extra,
            sa.Column("status", sa.String(20), nullable=False),
            sa.Column("received_at", sa.DateTime(), nullable=True),
            sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint(pk),
            sa.ForeignKeyConstraint(["lease_id"], ["lease_agreements.agreement_id"]),
            sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        )
        op.create_index(f"ix_{table}_lease_id", table, ["lease_id"])

    op.create_table(
        "renewal_requests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("agreement_id", sa.String(32), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("requested_start_date", sa.Date(), nullable=False),
        sa.Column("requested_end_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agreement_id"], ["lease_agreements.agreement_id"]),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["unit_id"], ["units.unit_id"]),
    )
    op.create_index("ix_renewal_requests_agreement_id", "renewal_requests", ["agreement_id"])

    op.create_table(
        "lease_ekyp",
        sa.Column("ekyp_id", sa.String(36), nullable=False),
        sa.Column("agreement_id", sa.String(32), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("qr_payload", sa.Text(), nullable=False),
        sa.Column("qr_hash", sa.String(64), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("issued_at", sa.DateTime(), nullable=False),
        sa.Column("revoked_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("ekyp_id"),
        sa.ForeignKeyConstraint(["agreement_id"], ["lease_agreements.agreement_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["unit_id"], ["units.unit_id"]),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.landlord_id"]),
        sa.UniqueConstraint("agreement_id", name="uq_lease_ekyp_agreement_id"),
    )

    op.create_table(
        "post_dated_checks",
        sa.Column("pdc_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("lease_id", sa.String(32), nullable=False),
        sa.Column("check_number", sa.String(50), nullable=True),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("uploaded_image_url", sa.String(500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("cleared_at", sa.DateTime(), nullable=True),
        sa.Column("bounced_at", sa.DateTime(), nullable=True),
        sa.Column("replaced_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("pdc_id"),
        sa.ForeignKeyConstraint(["lease_id"], ["lease_agreements.agreement_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_post_dated_checks_lease_id", "post_dated_checks", ["lease_id"])
    op.create_index("ix_post_dated_checks_due_date", "post_dated_checks", ["due_date"])
    op.create_index("ix_post_dated_checks_status", "post_dated_checks", ["status"])

    op.create_table(
        "billings",
        sa.Column("billing_id", sa.String(20), nullable=False),
        sa.Column("lease_id", sa.String(32), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("billing_period", sa.Date(), nullable=False),
        sa.Column("total_water_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_electricity_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_amount_due", sa.Numeric(12, 2), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("billing_id"),
        sa.ForeignKeyConstraint(["lease_id"], ["lease_agreements.agreement_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.unit_id"]),
    )
    op.create_index("ix_billings_lease_id", "billings", ["lease_id"])
    op.create_index("ix_billings_unit_id", "billings", ["unit_id"])
    op.create_index("ix_billings_billing_period", "billings", ["billing_period"])
    op.create_index("ix_billings_due_date", "billings", ["due_date"])
    op.create_index("ix_billings_status", "billings", ["status"])

    op.create_table(
        "billing_additional_charges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("billing_id", sa.String(20), nullable=False),
        sa.Column("charge_category", sa.String(20), nullable=False),
        sa.Column("charge_type", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["billing_id"], ["billings.billing_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_billing_additional_charges_billing_id", "billing_additional_charges", ["billing_id"])

    op.create_table(
        "meter_readings",
        sa.Column("reading_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("utility_type", sa.String(20), nullable=False),
        sa.Column("reading_date", sa.Date(), nullable=False),
        sa.Column("previous_reading", sa.Numeric(12, 2), nullable=False),
        sa.Column("current_reading", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("reading_id"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.unit_id"]),
    )
    op.create_index("ix_meter_readings_unit_id", "meter_readings", ["unit_id"])

    op.create_table(
        "payments",
        sa.Column("payment_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("bill_id", sa.String(20), nullable=True),
        sa.Column("agreement_id", sa.String(32), nullable=False),
        sa.Column("payment_type", sa.String(30), nullable=False),
        sa.Column("amount_paid", sa.Numeric(12, 2), nullable=False),
        sa.Column("gross_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("net_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("gateway_fee", sa.Numeric(12, 2), nullable=True),
        sa.Column("gateway_vat", sa.Numeric(12, 2), nullable=True),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("payment_status", sa.String(20), nullable=False),
        sa.Column("payout_status", sa.String(20), nullable=False),
        sa.Column("proof_of_payment", sa.String(500), nullable=True),
        sa.Column("receipt_reference", sa.String(100), nullable=True),
        sa.Column("gateway_transaction_ref", sa.String(100), nullable=True),
        sa.Column("payment_date", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("payment_id"),
        sa.ForeignKeyConstraint(["bill_id"], ["billings.billing_id"]),
        sa.ForeignKeyConstraint(["agreement_id"], ["lease_agreements.agreement_id"]),
        sa.UniqueConstraint("receipt_reference", name="uq_payments_receipt_reference"),
    )
    op.create_index("ix_payments_bill_id", "payments", ["bill_id"])
    op.create_index("ix_payments_agreement_id", "payments", ["agreement_id"])
    op.create_index("ix_payments_payment_status", "payments", ["payment_status"])
    op.create_index("ix_payments_payout_status", "payments", ["payout_status"])
    op.create_index("ix_payments_gateway_transaction_ref", "payments", ["gateway_transaction_ref"])

    op.create_table(
        "payment_ledger",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("payment_id", sa.Integer(), nullable=False),
        sa.Column("transaction_hash", sa.String(64), nullable=False),
        sa.Column("previous_hash", sa.String(64), nullable=False),
        sa.Column("timestamp", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["payment_id"],
            ["payments.payment_id"],
            name="fk_payment_ledger_payment_id",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_payment_ledger_payment_id", "payment_ledger", ["payment_id"], unique=True)
    op.create_index("ix_payment_ledger_transaction_hash", "payment_ledger", ["transaction_hash"], unique=True)
    op.create_index("ix_payment_ledger_previous_hash", "payment_ledger", ["previous_hash"])

    op.create_table(
        "landlord_payout_accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("payout_method", sa.String(20), nullable=False),
        sa.Column("channel_code", sa.String(50), nullable=False),
        sa.Column("account_name", sa.String(255), nullable=False),
        sa.Column("account_number", sa.String(100), nullable=False),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.landlord_id"]),
    )
    op.create_index("ix_landlord_payout_accounts_landlord_id", "landlord_payout_accounts", ["landlord_id"])

    op.create_table(
        "landlord_payout_history",
        sa.Column("payout_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("included_payments", sa.Text(), nullable=False),
        sa.Column("payout_method", sa.String(20), nullable=False),
        sa.Column("channel_code", sa.String(50), nullable=False),
        sa.Column("account_name", sa.String(255), nullable=False),
        sa.Column("account_number", sa.String(100), nullable=False),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("external_id", sa.String(100), nullable=False),
        sa.Column("xendit_disbursement_id", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("payout_id"),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.landlord_id"]),
        sa.UniqueConstraint("external_id", name="uq_landlord_payout_history_external_id"),
    )
    op.create_index("ix_landlord_payout_history_landlord_id", "landlord_payout_history", ["landlord_id"])

    op.create_table(
        "maintenance_requests",
        sa.Column("request_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("schedule_date", sa.Date(), nullable=True),
        sa.Column("completion_date", sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("request_id"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["unit_id"], ["units.unit_id"]),
    )
    op.create_index("ix_maintenance_requests_tenant_id", "maintenance_requests", ["tenant_id"])
    op.create_index("ix_maintenance_requests_unit_id", "maintenance_requests", ["unit_id"])
    op.create_index("ix_maintenance_requests_status", "maintenance_requests", ["status"])

    op.create_table(
        "maintenance_photos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("request_id", sa.Integer(), nullable=False),
        sa.Column("photo_url", sa.String(500), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["request_id"], ["maintenance_requests.request_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_maintenance_photos_request_id", "maintenance_photos", ["request_id"])

    op.create_table(
        "announcements",
        sa.Column("announcement_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("announcement_id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.property_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.landlord_id"]),
    )
    op.create_index("ix_announcements_property_id", "announcements", ["property_id"])
    op.create_index("ix_announcements_landlord_id", "announcements", ["landlord_id"])

    op.create_table(
        "announcement_photos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("announcement_id", sa.Integer(), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["announcement_id"], ["announcements.announcement_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_announcement_photos_announcement_id", "announcement_photos", ["announcement_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("url", sa.String(500), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    op.create_table(
        "activity_logs",
        sa.Column("log_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("action", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("target_table", sa.String(100), nullable=True),
        sa.Column("target_id", sa.String(100), nullable=True),
        sa.Column("old_value", sa.Text(), nullable=True),
        sa.Column("new_value", sa.Text(), nullable=True),
        sa.Column("endpoint", sa.String(255), nullable=True),
        sa.Column("http_method", sa.String(10), nullable=True),
        sa.Column("status_code", sa.Integer(), nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.String(500), nullable=True),
        sa.Column("device_type", sa.String(20), nullable=True),
        sa.Column("timestamp", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("log_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_activity_logs_user_id", "activity_logs", ["user_id"])
    op.create_index("ix_activity_logs_timestamp", "activity_logs", ["timestamp"])


def downgrade() -> None:
    # Child tables first; drop_table removes their indexes with them
    for table in (
        "activity_logs",
        "notifications",
        "announcement_photos",
        "announcements",
        "maintenance_photos",
        "maintenance_requests",
        "landlord_payout_history",
        "landlord_payout_accounts",
        "payment_ledger",
        "payments",
        "meter_readings",
        "billing_additional_charges",
        "billings",
        "post_dated_checks",
        "lease_ekyp",
        "renewal_requests",
        "advance_payments",
        "security_deposits",
        "lease_signatures",
        "lease_agreements",
        "prospective_tenants",
        "units",
        "properties",
        "tenants",
        "landlords",
        "users",
    ):
        op.drop_table(table)
