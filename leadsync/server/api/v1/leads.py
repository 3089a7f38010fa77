"""
API endpoints for managing sales leads.

Provides CRUD operations on leads plus scoring, website checks, outreach
email and conversion. Every write re-scores the lead.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from leadsync.core.database.entities import Lead
from leadsync.core.logging_config import get_logger
from leadsync.core.models.domain import LeadSource, LeadStatus
from leadsync.core.models.io import (
    LeadCreate,
    LeadRead,
    LeadScoreRead,
    LeadUpdate,
    OutreachDraft,
    OutreachRequest,
    OutreachResult,
    RescoreResult,
)
from leadsync.server.services.deps import LeadServiceDep, MailerDep, WebsiteCheckerDep
from leadsync.services import LeadHasNoEmailError, LeadService
from leadsync.website_checker import WebsiteCheckResult

logger = get_logger(__name__)

router = APIRouter(tags=["leads"])


async def _get_lead_or_404(service: LeadService, lead_id: str) -> Lead:
    lead = await service.get(lead_id)
    if lead is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lead {lead_id} not found")
    return lead


@router.post(
    "",
    response_model=LeadRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Lead",
    description="Create a new lead. The lead score is calculated before the lead is stored.",
    response_description="The created lead with its score.",
    responses={
        201: {"description": "Lead created successfully"},
        422: {"description": "Invalid lead data"},
    },
)
async def create_lead(data: LeadCreate, service: LeadServiceDep) -> LeadRead:
    """
    Create a new lead.

    - **name**: Contact or business name (required).
    - **website_url**: When given, the lead counts as having a website unless
      **has_website** says otherwise.
    - **annual_revenue**: Whole dollars.
    - **tags**: Free-form list of tags.
    """
    lead = await service.create(data)
    return LeadRead.model_validate(lead)


@router.get(
    "",
    response_model=List[LeadRead],
    summary="List Leads",
    description="List leads ordered by score, highest first, with optional filters.",
    response_description="A list of leads.",
)
async def list_leads(
    service: LeadServiceDep,
    status_filter: Optional[LeadStatus] = Query(default=None, alias="status"),
    source: Optional[LeadSource] = None,
    min_score: Optional[int] = Query(default=None, ge=0, le=100),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> List[LeadRead]:
    """
    List leads.

    - **status**: Only leads in this pipeline status.
    - **source**: Only leads captured from this source.
    - **min_score**: Only leads scoring at least this value.
    - **limit** / **offset**: Pagination.
    """
    leads = await service.list(status=status_filter, source=source, min_score=min_score, limit=limit, offset=offset)
    return [LeadRead.model_validate(lead) for lead in leads]


@router.post(
    "/rescore",
    response_model=RescoreResult,
    summary="Rescore All Leads",
    description="Recalculate the score of every lead, for example after changing the scoring settings.",
    response_description="How many leads changed score out of the total.",
)
async def rescore_leads(service: LeadServiceDep) -> RescoreResult:
    return await service.rescore_all()


@router.get(
    "/{lead_id}",
    response_model=LeadRead,
    summary="Get Lead",
    description="Retrieve a lead by its unique identifier.",
    response_description="The lead object.",
    responses={404: {"description": "Lead not found"}},
)
async def get_lead(lead_id: str, service: LeadServiceDep) -> LeadRead:
    lead = await _get_lead_or_404(service, lead_id)
    return LeadRead.model_validate(lead)


@router.patch(
    "/{lead_id}",
    response_model=LeadRead,
    summary="Update Lead",
    description="Partially update a lead. Only fields present in the body change, then the lead is re-scored.",
    response_description="The updated lead.",
    responses={404: {"description": "Lead not found"}},
)
async def update_lead(lead_id: str, data: LeadUpdate, service: LeadServiceDep) -> LeadRead:
    """
    Update a lead.

    Changing **website_url** without **has_website** updates the website flag
    to match. Setting **status** to CONVERTED stamps the conversion time.
    """
    lead = await _get_lead_or_404(service, lead_id)
    lead = await service.update(lead, data)
    return LeadRead.model_validate(lead)


@router.delete(
    "/{lead_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Lead",
    description="Permanently delete a lead.",
    responses={
        204: {"description": "Lead deleted"},
        404: {"description": "Lead not found"},
    },
)
async def delete_lead(lead_id: str, service: LeadServiceDep) -> Response:
    if not await service.delete(lead_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lead {lead_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{lead_id}/score",
    response_model=LeadScoreRead,
    summary="Get Lead Score Breakdown",
    description="Per-factor score breakdown with a recommendation, label, tier and map marker colour.",
    response_description="The score breakdown.",
    responses={404: {"description": "Lead not found"}},
)
async def get_lead_score(lead_id: str, service: LeadServiceDep) -> LeadScoreRead:
    lead = await _get_lead_or_404(service, lead_id)
    return service.score_details(lead)


@router.post(
    "/{lead_id}/website-check",
    response_model=WebsiteCheckResult,
    summary="Check Lead Website",
    description="Fetch and grade the lead's website, store the quality on the lead and re-score it.",
    response_description="The website check result.",
    responses={404: {"description": "Lead not found"}},
)
async def check_lead_website(
    lead_id: str, service: LeadServiceDep, checker: WebsiteCheckerDep
) -> WebsiteCheckResult:
    """
    Check the lead's website.

    An unreachable site is graded POOR with score 0. The check itself never
    fails the request.
    """
    lead = await _get_lead_or_404(service, lead_id)
    return await service.check_website(lead, checker)


@router.get(
    "/{lead_id}/outreach-draft",
    response_model=OutreachDraft,
    summary="Get Outreach Draft",
    description="Render the first-contact email for a lead without sending it.",
    response_description="Subject, HTML and text of the draft.",
    responses={404: {"description": "Lead not found"}},
)
async def get_outreach_draft(lead_id: str, service: LeadServiceDep, mailer: MailerDep) -> OutreachDraft:
    lead = await _get_lead_or_404(service, lead_id)
    return service.outreach_draft(lead, mailer)


@router.post(
    "/{lead_id}/outreach",
    response_model=OutreachResult,
    summary="Send Outreach Email",
    description="Send the outreach draft, or an edited subject and body, to the lead's email address.",
    response_description="The updated lead and the provider email id.",
    responses={
        400: {"description": "Lead has no email address"},
        404: {"description": "Lead not found"},
        502: {"description": "Email delivery failed"},
    },
)
async def send_outreach(
    lead_id: str,
    service: LeadServiceDep,
    mailer: MailerDep,
    edits: Optional[OutreachRequest] = None,
) -> OutreachResult:
    """
    Send an outreach email.

    On success the lead's email count goes up, a NEW lead becomes CONTACTED
    and the score is recalculated with the outreach penalty applied.
    """
    lead = await _get_lead_or_404(service, lead_id)
    try:
        lead, email_id = await service.send_outreach(lead, mailer, edits)
    except LeadHasNoEmailError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return OutreachResult(lead=LeadRead.model_validate(lead), email_id=email_id)


@router.post(
    "/{lead_id}/convert",
    response_model=LeadRead,
    summary="Convert Lead",
    description="Mark the lead as converted to a client. A converted lead scores 0.",
    response_description="The converted lead.",
    responses={404: {"description": "Lead not found"}},
)
async def convert_lead(lead_id: str, service: LeadServiceDep) -> LeadRead:
    lead = await _get_lead_or_404(service, lead_id)
    lead = await service.convert(lead)
    return LeadRead.model_validate(lead)
