# apps/api/lead/service.py
import logging
from typing import Annotated, List, Optional

from sqlalchemy import select

from apps.api.lead.models import Lead, LeadStatus
from apps.api.lead.schema import LeadCreate
from core.architecture.service import AbstractService
from core.exceptions import InvalidRequestException, NotFoundException

logger = logging.getLogger(__name__)


def validate_status(status: Optional[str]) -> str:
    try:
        return LeadStatus((status or "").strip().lower()).value
    except ValueError:
        raise InvalidRequestException(
            f"Invalid status. Must be one of: {', '.join(LeadStatus.values())}",
            error_code="INVALID_STATUS",
        )


class LeadService(AbstractService):
    def __init__(self, session, **kwargs):
        super().__init__(session=session, **kwargs)
        self.session = session

    async def list_leads(self, status: Optional[str] = None) -> List[Lead]:
        """Leads newest first, optionally filtered by status."""
        query = select(Lead)
        if status is not None:
            query = query.where(Lead.status == validate_status(status))

        result = await self.session.scalars(
            query.order_by(Lead.created_at.desc(), Lead.id.desc())
        )
        return list(result.all())

    async def list_leads_by_status(self, status: str) -> List[Lead]:
        return await self.list_leads(status=status)

    async def get_lead(self, lead_id: int) -> Lead:
        lead = await self.session.get(Lead, lead_id)
        if not lead:
            raise NotFoundException("Lead not found", error_code="LEAD_NOT_FOUND")
        return lead

    async def create_lead(self, lead_data: LeadCreate) -> Lead:
        lead = Lead(**lead_data.model_dump(), status=LeadStatus.NEW.value)
        self.session.add(lead)
        await self.session.commit()
        await self.session.refresh(lead)
        logger.info(f"Lead {lead.id} captured")
        return lead

    async def update_lead_status(self, lead_id: int, status: Optional[str]) -> Lead:
        """
        Move a lead to another status.

        The status is validated before the lead is looked up, so a bad status
        never touches the store.

        Raises:
            InvalidRequestException: If the status is outside the closed set.
            NotFoundException: If no lead has this id.
        """
        new_status = validate_status(status)
        lead = await self.get_lead(lead_id)

        lead.status = new_status
        lead.touch()
        await self.session.commit()
        await self.session.refresh(lead)
        logger.info(f"Lead {lead.id} moved to {new_status}")
        return lead

    async def delete_lead(self, lead_id: int):
        lead = await self.get_lead(lead_id)
        await self.session.delete(lead)
        await self.session.commit()
        logger.info(f"Lead {lead_id} deleted")


LeadServiceDependency = Annotated[LeadService, LeadService.get_dependency()]
