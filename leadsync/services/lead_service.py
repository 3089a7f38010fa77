"""
Service for managing sales leads.

Wraps the lead repository with the behaviour the leads API needs: scoring
on every write, website checks, outreach drafts and delivery, and
conversion to a client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from leadsync.core.database import utc_now
from leadsync.core.database.entities import Lead
from leadsync.core.database.repositories import LeadRepository
from leadsync.core.logging_config import get_logger
from leadsync.core.models.domain import LeadStatus, WebsiteQuality
from leadsync.core.models.io import (
    LeadCreate,
    LeadScoreRead,
    LeadUpdate,
    OutreachDraft,
    OutreachRequest,
    RescoreResult,
)
from leadsync.email import Mailer, render_outreach_email, strip_html
from leadsync.integrations import EmailDeliveryError
from leadsync.integrations.resend import EmailMessage
from leadsync.scoring import (
    ScoringProfile,
    calculate_lead_score,
    calculate_lead_score_detailed,
    get_marker_color,
    get_score_label,
    get_score_tier,
    recalculate_lead_scores,
)
from leadsync.website_checker import WebsiteChecker, WebsiteCheckResult

logger = get_logger(__name__)


class LeadHasNoEmailError(ValueError):
    """Raised when outreach is attempted for a lead without an email address."""

    def __init__(self, lead_id: str) -> None:
        super().__init__(f"Lead {lead_id} has no email address")
        self.lead_id = lead_id


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class LeadService:
    """Business operations on leads.

    Args:
        leads: Lead repository bound to the request session
        profile: Scoring profile; the settings-derived default when omitted
    """

    def __init__(self, leads: LeadRepository, profile: Optional[ScoringProfile] = None) -> None:
        self.leads = leads
        self.profile = profile

    def score(self, lead: Lead) -> int:
        lead.lead_score = calculate_lead_score(lead, self.profile)
        return lead.lead_score

    async def create(self, data: LeadCreate) -> Lead:
        values = data.model_dump(exclude={"tags"})
        values = {k: _enum_value(v) for k, v in values.items()}
        if values.get("has_website") is None:
            values["has_website"] = bool(data.website_url)

        lead = Lead(**values)
        lead.set_tags_list(data.tags)
        self.score(lead)
        lead = await self.leads.create(lead)
        logger.info(f"Created lead {lead.id} ({lead.name}) with score {lead.lead_score}")
        return lead

    async def get(self, lead_id: str) -> Optional[Lead]:
        return await self.leads.get_by_id(lead_id)

    async def list(
        self,
        *,
        status: Optional[LeadStatus] = None,
        source: Optional[str] = None,
        min_score: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Lead]:
        filters: Dict[str, Any] = {
            "status": _enum_value(status),
            "source": _enum_value(source),
            "min_score": min_score,
        }
        return await self.leads.list(limit=limit, offset=offset, filters=filters)

    async def update(self, lead: Lead, data: LeadUpdate) -> Lead:
        """Apply the fields set on ``data`` and re-score the lead."""
        changes = data.model_dump(exclude_unset=True)
        tags = changes.pop("tags", None)
        for key, value in changes.items():
            setattr(lead, key, _enum_value(value))
        if "website_url" in changes and "has_website" not in changes:
            lead.has_website = bool(lead.website_url)
        if tags is not None:
            lead.set_tags_list(tags)
        if changes.get("status") == LeadStatus.converted and lead.converted_at is None:
            lead.converted_at = utc_now()
        self.score(lead)
        return await self.leads.update(lead)

    async def delete(self, lead_id: str) -> bool:
        return await self.leads.delete(lead_id)

    def score_details(self, lead: Lead) -> LeadScoreRead:
        breakdown = calculate_lead_score_detailed(lead, self.profile)
        label = get_score_label(breakdown.total)
        return LeadScoreRead(
            lead_id=lead.id,
            score=breakdown,
            label=label.label,
            label_color=label.color,
            tier=get_score_tier(breakdown.total),
            marker_color=get_marker_color(breakdown.total),
        )

    async def rescore_all(self) -> RescoreResult:
        """Recompute the score of every lead and persist the ones that changed."""
        leads = await self.leads.list_all()
        scores = recalculate_lead_scores(leads, self.profile)
        updated = 0
        for index, lead in enumerate(leads):
            if lead.lead_score != scores[index]:
                lead.lead_score = scores[index]
                lead.updated_at = utc_now()
                self.leads.session.add(lead)
                updated += 1
        if updated:
            await self.leads.session.commit()
        logger.info(f"Rescored leads: {updated} of {len(leads)} changed")
        return RescoreResult(updated=updated, total=len(leads))

    async def check_website(self, lead: Lead, checker: WebsiteChecker) -> WebsiteCheckResult:
        """Grade the lead's website, store the result and re-score.

        A lead without a URL is marked as having no website and only re-scored.
        """
        if not lead.website_url:
            result = WebsiteCheckResult(
                url="", reachable=False, score=0, quality=WebsiteQuality.poor, reasons=["no website url"]
            )
            lead.has_website = False
        else:
            result = await checker.check(lead.website_url)
            lead.has_website = True
            lead.website_quality = result.quality.value
            lead.website_score = result.score
            lead.website_checked_at = utc_now()
        self.score(lead)
        await self.leads.update(lead)
        logger.info(f"Website check for lead {lead.id}: {result.quality.value} ({result.score})")
        return result

    def outreach_draft(self, lead: Lead, mailer: Mailer) -> OutreachDraft:
        rendered = render_outreach_email(lead, brand=mailer.brand, site_url=mailer.site_url)
        return OutreachDraft(
            lead_id=lead.id,
            to=lead.email,
            subject=rendered.subject,
            html=rendered.html,
            text=rendered.text,
        )

    async def send_outreach(
        self, lead: Lead, mailer: Mailer, edits: Optional[OutreachRequest] = None
    ) -> Tuple[Lead, Optional[str]]:
        """Email the outreach draft (or the edited version) to the lead.

        Raises:
            LeadHasNoEmailError: The lead has no email address
            EmailDeliveryError: Resend rejected the message or the recipient is rate limited
        """
        if not lead.email:
            raise LeadHasNoEmailError(lead.id)

        draft = self.outreach_draft(lead, mailer)
        subject = draft.subject
        html = draft.html
        text = draft.text
        if edits is not None:
            subject = edits.subject or subject
            if edits.html:
                html = edits.html
                text = edits.text or strip_html(edits.html)
            elif edits.text:
                text = edits.text

        result = await mailer.send_with_rate_limit(
            EmailMessage(to=lead.email, subject=subject, html=html, text=text), action="outreach"
        )
        if not result.success:
            logger.warning(f"Outreach to lead {lead.id} failed: {result.error}")
            raise EmailDeliveryError(
                result.error or "Failed to send email", status_code=429 if result.rate_limited else None
            )

        lead.emails_sent = (lead.emails_sent or 0) + 1
        lead.last_contacted_at = utc_now()
        if lead.status == LeadStatus.new.value:
            lead.status = LeadStatus.contacted.value
        self.score(lead)
        lead = await self.leads.update(lead)
        logger.info(f"Outreach email sent to lead {lead.id} (emails_sent={lead.emails_sent})")
        return lead, result.email_id

    async def convert(self, lead: Lead) -> Lead:
        if lead.converted_at is None:
            lead.converted_at = utc_now()
        lead.status = LeadStatus.converted.value
        self.score(lead)
        lead = await self.leads.update(lead)
        logger.info(f"Lead {lead.id} converted to client")
        return lead
