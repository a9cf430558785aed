"""
FastAPI dependencies: datastore, Xero client and the admin role check
"""
import logging
from functools import lru_cache
from typing import Optional
from fastapi import Depends, Header, HTTPException

from xero_audit.config import Settings, load_settings
from xero_audit.database import get_db, AuditRepository
from xero_audit.database.models import ProfileModel
from xero_audit.exceptions import DataAccessError
from xero_audit.models.schemas import UserRole
from xero_audit.xero import XeroClient

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def get_repository(settings: Settings = Depends(get_settings)) -> AuditRepository:
    return AuditRepository(get_db(settings.database_url))


def get_xero_client(settings: Settings = Depends(get_settings)) -> XeroClient:
    return XeroClient(
        base_url=settings.xero_api_base_url,
        timeout=settings.xero_timeout_seconds
    )


def require_admin(
    x_user_id: Optional[str] = Header(None),
    repository: AuditRepository = Depends(get_repository)
) -> ProfileModel:
    """
    The caller's identity arrives in X-User-Id from the auth layer in front
    of this service. Only active admins pass.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        profile = repository.get_profile(x_user_id)
    except DataAccessError as e:
        raise HTTPException(status_code=503, detail=str(e))

    if profile is None or not profile.is_active:
        raise HTTPException(status_code=401, detail="Unauthorized")

    if profile.role != UserRole.ADMIN.value:
        logger.warning(f"Non-admin user {x_user_id} denied access")
        raise HTTPException(status_code=403, detail="Forbidden - Admin access required")

    return profile
