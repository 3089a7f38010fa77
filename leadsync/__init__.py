"""Leadsync.

Lead scoring and payment reconciliation service for a small web agency and the
nonprofits it serves.

Core subpackages
----------------

- ``leadsync.scoring``: weighted lead scoring, score labels and tiers.
- ``leadsync.website_checker``: deterministic website quality assessment.
- ``leadsync.reconciliation``: signature verification and idempotent handling
  of Stripe and Square webhooks, plus re-reading charges from Stripe.
- ``leadsync.integrations``: thin httpx clients for Google Places, Stripe and
  Resend.
- ``leadsync.core.database``: SQLModel entities and async repositories.
- ``leadsync.server``: the FastAPI application.
"""

__version__ = "0.1.0"
