# apps/api/lead/router.py
from typing import List, Optional

from fastapi import APIRouter, Query, status

from apps.api.auth.dependency import AdminDependency
from apps.api.lead.schema import LeadCreate, LeadResponse, LeadStatusUpdate
from apps.api.lead.service import LeadServiceDependency
from core.response.models import MessageResponse

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.get("", description="List leads, newest first (admin)")
async def list_leads_endpoint(
    admin: AdminDependency,
    lead_service: LeadServiceDependency,
    status: Optional[str] = Query(None),
) -> List[LeadResponse]:
    return await lead_service.list_leads(status=status)


@router.post(
    "",
    description="Submit a lead from the storefront",
    status_code=status.HTTP_201_CREATED,
)
async def create_lead_endpoint(
    lead: LeadCreate, lead_service: LeadServiceDependency
) -> LeadResponse:
    return await lead_service.create_lead(lead)


@router.patch("/{lead_id}", description="Change a lead's status (admin)")
async def update_lead_status_endpoint(
    lead_id: int,
    update: LeadStatusUpdate,
    admin: AdminDependency,
    lead_service: LeadServiceDependency,
) -> LeadResponse:
    return await lead_service.update_lead_status(lead_id, update.status)


@router.delete("/{lead_id}", description="Delete a lead (admin)")
async def delete_lead_endpoint(
    lead_id: int,
    admin: AdminDependency,
    lead_service: LeadServiceDependency,
) -> MessageResponse:
    await lead_service.delete_lead(lead_id)
    return MessageResponse(message="Lead deleted successfully")
