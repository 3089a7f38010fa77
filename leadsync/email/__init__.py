"""Outgoing email: templates, rate limiting and the mailer facade."""

from .mailer import Mailer
from .rate_limit import EmailRateLimiter, RateLimitDecision
from .templates import (
    RenderedEmail,
    format_cents,
    render_donation_thank_you,
    render_email_layout,
    render_outreach_email,
    render_template,
    strip_html,
)

__all__ = [
    "EmailRateLimiter",
    "Mailer",
    "RateLimitDecision",
    "RenderedEmail",
    "format_cents",
    "render_donation_thank_you",
    "render_email_layout",
    "render_outreach_email",
    "render_template",
    "strip_html",
]
