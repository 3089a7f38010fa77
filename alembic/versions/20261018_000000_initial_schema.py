"""Initial schema for Leadsync

Revision ID: 20261018_000000
Revises: None
Create Date: 2026-10-18 00:00:00.000000

Creates the tables used by lead scoring and payment reconciliation:
- Leads
- Organizations and projects (Stripe customers and maintenance subscriptions)
- Invoices and payments
- Donations (Square)
- Webhook log used to apply provider events exactly once

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261018_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    # Create ls_leads table
    op.create_table(
        "ls_leads",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column("website_url", sa.String(512), nullable=True),
        sa.Column("has_website", sa.Boolean(), nullable=False),
        sa.Column("website_quality", sa.String(16), nullable=True),
        sa.Column("website_score", sa.Integer(), nullable=True),
        sa.Column("website_checked_at", sa.DateTime(), nullable=True),
        sa.Column("annual_revenue", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(128), nullable=True),
        sa.Column("employee_count", sa.Integer(), nullable=True),
        sa.Column("address", sa.String(512), nullable=True),
        sa.Column("city", sa.String(128), nullable=True),
        sa.Column("state", sa.String(64), nullable=True),
        sa.Column("zip_code", sa.String(16), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("source", sa.String(32), nullable=False),
        sa.Column("google_place_id", sa.String(255), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("total_ratings", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("lead_score", sa.Integer(), nullable=False),
        sa.Column("emails_sent", sa.Integer(), nullable=False),
        sa.Column("last_contacted_at", sa.DateTime(), nullable=True),
        sa.Column("converted_at", sa.DateTime(), nullable=True),
        sa.Column("tags", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ls_leads_name", "ls_leads", ["name"])
    op.create_index("ix_ls_leads_company", "ls_leads", ["company"])
    op.create_index("ix_ls_leads_google_place_id", "ls_leads", ["google_place_id"])
    op.create_index("ix_ls_leads_status", "ls_leads", ["status"])
    op.create_index("ix_ls_leads_lead_score", "ls_leads", ["lead_score"])
    op.create_index("ix_ls_leads_created_at", "ls_leads", ["created_at"])

    # Create ls_organizations table
    op.create_table(
        "ls_organizations",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("stripe_customer_id", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ls_organizations_slug", "ls_organizations", ["slug"], unique=True)
    op.create_index("ix_ls_organizations_stripe_customer_id", "ls_organizations", ["stripe_customer_id"])

    # Create ls_projects table
    op.create_table(
        "ls_projects",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("organization_id", sa.String(64), nullable=False),
        sa.Column("stripe_customer_id", sa.String(255), nullable=True),
        sa.Column("stripe_subscription_id", sa.String(255), nullable=True),
        sa.Column("maintenance_status", sa.String(16), nullable=False),
        sa.Column("next_billing_date", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["ls_organizations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ls_projects_organization_id", "ls_projects", ["organization_id"])
    op.create_index("ix_ls_projects_stripe_customer_id", "ls_projects", ["stripe_customer_id"])
    op.create_index("ix_ls_projects_stripe_subscription_id", "ls_projects", ["stripe_subscription_id"])

    # Create ls_invoices table
    op.create_table(
        "ls_invoices",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("number", sa.String(64), nullable=False),
        sa.Column("organization_id", sa.String(64), nullable=True),
        sa.Column("project_id", sa.String(64), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("total_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(8), nullable=False),
        sa.Column("stripe_invoice_id", sa.String(255), nullable=True),
        sa.Column("due_date", sa.DateTime(), nullable=True),
        sa.Column("sent_at", sa.DateTime(), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["ls_organizations.id"]),
        sa.ForeignKeyConstraint(["project_id"], ["ls_projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ls_invoices_number", "ls_invoices", ["number"], unique=True)
    op.create_index("ix_ls_invoices_organization_id", "ls_invoices", ["organization_id"])
    op.create_index("ix_ls_invoices_project_id", "ls_invoices", ["project_id"])
    op.create_index("ix_ls_invoices_status", "ls_invoices", ["status"])
    op.create_index("ix_ls_invoices_stripe_invoice_id", "ls_invoices", ["stripe_invoice_id"])
    op.create_index("ix_ls_invoices_created_at", "ls_invoices", ["created_at"])

    # Create ls_payments table
    op.create_table(
        "ls_payments",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("invoice_id", sa.String(64), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("method", sa.String(32), nullable=False),
        sa.Column("currency", sa.String(8), nullable=False),
        sa.Column("stripe_charge_id", sa.String(255), nullable=True),
        sa.Column("stripe_payment_id", sa.String(255), nullable=True),
        sa.Column("processed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["invoice_id"], ["ls_invoices.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ls_payments_invoice_id", "ls_payments", ["invoice_id"])
    op.create_index("ix_ls_payments_stripe_charge_id", "ls_payments", ["stripe_charge_id"], unique=True)
    op.create_index("ix_ls_payments_stripe_payment_id", "ls_payments", ["stripe_payment_id"])

    # Create ls_donations table
    op.create_table(
        "ls_donations",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("donor_name", sa.String(255), nullable=False),
        sa.Column("donor_email", sa.String(255), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("frequency", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("square_payment_id", sa.String(255), nullable=True),
        sa.Column("square_subscription_id", sa.String(255), nullable=True),
        sa.Column("next_renewal_date", sa.DateTime(), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(), nullable=True),
        sa.Column("thank_you_sent_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ls_donations_status", "ls_donations", ["status"])
    op.create_index("ix_ls_donations_square_payment_id", "ls_donations", ["square_payment_id"])
    op.create_index("ix_ls_donations_square_subscription_id", "ls_donations", ["square_subscription_id"])

    # Create ls_webhook_logs table
    op.create_table(
        "ls_webhook_logs",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("provider", sa.String(16), nullable=False),
        sa.Column("event_id", sa.String(255), nullable=False),
        sa.Column("event_type", sa.String(128), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=True),
        sa.Column("error", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("provider", "event_id", name="uq_ls_webhook_logs_provider_event"),
    )
    op.create_index("ix_ls_webhook_logs_provider", "ls_webhook_logs", ["provider"])
    op.create_index("ix_ls_webhook_logs_event_id", "ls_webhook_logs", ["event_id"])
    op.create_index("ix_ls_webhook_logs_created_at", "ls_webhook_logs", ["created_at"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("ls_webhook_logs")
    op.drop_table("ls_donations")
    op.drop_table("ls_payments")
    op.drop_table("ls_invoices")
    op.drop_table("ls_projects")
    op.drop_table("ls_organizations")
    op.drop_table("ls_leads")
