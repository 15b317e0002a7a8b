"""
Lead and settings administration endpoints.

Routes:
- GET /leads - Captured leads, newest first
- GET /settings - Current application settings (admin password omitted)
- PUT /settings - Save application settings
- GET /settings/version - Settings version for change polling

Dependencies: samastha_ai.application.services.document_service
System role: Admin HTTP API
"""

from fastapi import APIRouter, Depends

from samastha_ai.api.deps.dependencies import get_document_service
from samastha_ai.api.routers.error_handling import handle_domain_errors
from samastha_ai.application.services.document_service import DocumentService
from samastha_ai.models.app_settings import AppSettings, PublicAppSettings, SettingsVersionResponse
from samastha_ai.models.lead import LeadListResponse

router = APIRouter(tags=["admin"])


@router.get("/leads", response_model=LeadListResponse)
@handle_domain_errors
async def list_leads(
    document_service: DocumentService = Depends(get_document_service),
) -> LeadListResponse:
    """List captured leads, newest first."""
    leads = document_service.list_leads()
    return LeadListResponse(leads=leads, total=len(leads))


@router.get("/settings", response_model=PublicAppSettings)
@handle_domain_errors
async def get_app_settings(
    document_service: DocumentService = Depends(get_document_service),
) -> PublicAppSettings:
    """Saved settings merged over defaults, without the admin password."""
    return document_service.get_settings().public()


@router.put("/settings", response_model=SettingsVersionResponse)
@handle_domain_errors
async def save_app_settings(
    settings: AppSettings,
    document_service: DocumentService = Depends(get_document_service),
) -> SettingsVersionResponse:
    """
    Save settings; the version only moves when something changed.

    A body without admin_password keeps the stored password.
    """
    if "admin_password" not in settings.model_fields_set:
        current = document_service.get_settings()
        settings = settings.model_copy(update={"admin_password": current.admin_password})
    return SettingsVersionResponse(version=document_service.save_settings(settings))


@router.get("/settings/version", response_model=SettingsVersionResponse)
@handle_domain_errors
async def get_settings_version(
    document_service: DocumentService = Depends(get_document_service),
) -> SettingsVersionResponse:
    """Cheap change check for polling clients."""
    return SettingsVersionResponse(version=document_service.settings_version())
