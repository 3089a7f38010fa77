"""Resend email API client."""

from .client import ResendClient, explain_error
from .models import EmailMessage, EmailResult

__all__ = ["EmailMessage", "EmailResult", "ResendClient", "explain_error"]
