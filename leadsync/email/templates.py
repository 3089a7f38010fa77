"""
Email templates.

Templates substitute ``{{variable}}`` placeholders (values are HTML-escaped
in the HTML part) and wrap the result in the shared responsive layout.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def _plain(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value or "")


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str


def strip_html(content: str) -> str:
    """Derive a plain-text body from HTML."""
    text = re.sub(r"<br\s*/?>", "\n", content, flags=re.IGNORECASE)
    text = re.sub(r"</p>", "\n\n", text, flags=re.IGNORECASE)
    text = re.sub(r"</(div|li|h[1-6])>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]*>", "", text)
    text = html.unescape(text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def substitute(template: str, variables: Dict[str, Any], *, escape: bool) -> str:
    def _replace(match: "re.Match[str]") -> str:
        value = variables.get(match.group(1))
        value = "" if value is None else str(value)
        return html.escape(value) if escape else value

    return PLACEHOLDER_RE.sub(_replace, template)


def render_email_layout(content: str, *, brand: str, site_url: str) -> str:
    """Wrap body HTML in the shared email layout."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Email from {html.escape(brand)}</title>
  <style>
    body {{ margin: 0; padding: 0; font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif;
           font-size: 16px; line-height: 1.6; color: #333333; background-color: #f4f4f4; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
    .content {{ background-color: #ffffff; padding: 32px; border-radius: 8px; }}
    .footer {{ text-align: center; font-size: 13px; color: #888888; margin-top: 24px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="content">
{content}
    </div>
    <div class="footer">
      <p>{html.escape(brand)} &middot; <a href="{html.escape(site_url)}">{html.escape(site_url)}</a></p>
    </div>
  </div>
</body>
</html>"""


def render_template(
    subject: str,
    html_content: str,
    text_content: Optional[str],
    variables: Dict[str, Any],
    *,
    brand: str,
    site_url: str,
) -> RenderedEmail:
    """Fill placeholders in subject, HTML and text, then apply the layout.

    The text part is derived from the HTML when no text template is given.
    """
    body_html = substitute(html_content, variables, escape=True)
    if text_content is not None:
        text = substitute(text_content, variables, escape=False)
    else:
        text = strip_html(body_html)
    return RenderedEmail(
        subject=substitute(subject, variables, escape=False),
        html=render_email_layout(body_html, brand=brand, site_url=site_url),
        text=text,
    )


DONATION_THANK_YOU_SUBJECT = "Thank you for your donation, {{donor_name}}!"
DONATION_THANK_YOU_HTML = """<h1>Thank you, {{donor_name}}!</h1>
<p>We received your {{frequency_label}} donation of <strong>{{amount}}</strong>.</p>
<p>Your generosity keeps our programs running for the people who need them most.</p>
<p>Donation reference: {{donation_id}}</p>"""

FREQUENCY_LABELS = {"ONE_TIME": "one-time", "MONTHLY": "monthly", "YEARLY": "yearly"}


def format_cents(amount_cents: int, currency: str = "USD") -> str:
    if currency.upper() == "USD":
        return f"${amount_cents / 100:,.2f}"
    return f"{amount_cents / 100:,.2f} {currency.upper()}"


def render_donation_thank_you(donation: Any, *, brand: str, site_url: str) -> RenderedEmail:
    """Thank-you email for a completed donation."""
    variables = {
        "donor_name": donation.donor_name or "friend",
        "amount": format_cents(donation.amount_cents),
        "frequency_label": FREQUENCY_LABELS.get(_plain(donation.frequency), "one-time"),
        "donation_id": donation.id,
    }
    return render_template(
        DONATION_THANK_YOU_SUBJECT,
        DONATION_THANK_YOU_HTML,
        None,
        variables,
        brand=brand,
        site_url=site_url,
    )


def _outreach_pitch(lead: Any) -> str:
    if not getattr(lead, "has_website", False):
        return (
            "I noticed {{company}} doesn't have a website yet. A simple, mobile-friendly site makes it "
            "much easier for {{audience}} to find you, donate and get involved."
        )
    quality = _plain(getattr(lead, "website_quality", None))
    if quality in ("POOR", "FAIR"):
        return (
            "I took a look at {{company}}'s website and saw a few quick wins: mobile layout, page speed "
            "and making it easier for {{audience}} to reach you."
        )
    return (
        "I came across {{company}} and love the work you're doing. We help mission-driven organizations "
        "get more out of their websites with donations, volunteer sign-ups and event pages."
    )


def render_outreach_email(lead: Any, *, brand: str, site_url: str) -> RenderedEmail:
    """Deterministic first-contact email for a lead.

    The pitch depends on the lead's website status, the greeting on its
    location and the audience wording on its category.
    """
    company = getattr(lead, "company", None) or lead.name
    city = getattr(lead, "city", None)
    category = getattr(lead, "category", None)

    if not getattr(lead, "has_website", False):
        subject = "A website for {{company}}"
    else:
        subject = "A few ideas for {{company}}'s website"

    local_line = "<p>We're a local studio here in {{city}}, so we'd be happy to meet in person.</p>" if city else ""
    html_content = (
        "<p>Hi {{name}},</p>\n"
        f"<p>{_outreach_pitch(lead)}</p>\n"
        f"{local_line}\n"
        "<p>Would you be open to a quick 15 minute call next week?</p>\n"
        "<p>Best,<br>{{brand}}</p>"
    )
    variables = {
        "name": lead.name,
        "company": company,
        "city": city,
        "audience": f"people looking for {category.lower()} services" if category else "your community",
        "brand": brand,
    }
    return render_template(subject, html_content, None, variables, brand=brand, site_url=site_url)
