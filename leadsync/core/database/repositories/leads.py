"""
Lead repository.

Provides data access for sales leads, including the score-ordered listing
used by the leads API and the duplicate lookup used by Places discovery.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.leads import Lead
from .base import AsyncQueryBuilder, AsyncSQLModelRepository


class LeadRepository(AsyncSQLModelRepository[Lead]):
    """Repository for lead data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Lead)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Lead]:
        """List leads ordered by score, highest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (status, source). The special key
                ``min_score`` keeps leads scoring at least that value.

        Returns:
            List of Lead instances
        """
        filters = dict(filters or {})
        min_score = filters.pop("min_score", None)

        stmt = select(Lead).order_by(Lead.lead_score.desc(), Lead.created_at.desc())  # type: ignore
        if min_score is not None:
            stmt = stmt.where(Lead.lead_score >= min_score)
        if filters:
            stmt = AsyncQueryBuilder.apply_filters(stmt, Lead, filters)
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_all(self) -> List[Lead]:
        """Return every lead, used by batch re-scoring."""
        result = await self.session.exec(select(Lead))
        return list(result.all())

    async def find_existing_by_name(self, name: str) -> Optional[Lead]:
        """Find a lead whose name or company equals ``name`` (case-insensitive).

        Args:
            name: Business name to look up

        Returns:
            The first matching Lead, or None
        """
        lowered = name.strip().lower()
        stmt = select(Lead).where(
            or_(func.lower(Lead.name) == lowered, func.lower(Lead.company) == lowered)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_place_id(self, place_id: str) -> Optional[Lead]:
        result = await self.session.exec(select(Lead).where(Lead.google_place_id == place_id))
        return result.first()
