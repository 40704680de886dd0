"""API router for host system profile enumeration.

Provides endpoints for:
- Enumerating system profile field values across filtered hosts
- Listing enumerable fields
- Backend health
"""

import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException
from opensearchpy.exceptions import TransportError
from pydantic import BaseModel, ConfigDict, Field

from .errors import BackendExecutionError, InputValidationError, UnknownFieldError
from .host_filter import HostFilter
from .models import EnumerationArgs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Host System Profile"])

# Module-level references (set by configure_router)
_profile = None


def configure_router(profile):
    """Configure router with a HostSystemProfile instance."""
    global _profile
    _profile = profile


# Request Models

class SystemProfileRequest(BaseModel):
    """Host selection plus the fields to enumerate."""
    model_config = ConfigDict(populate_by_name=True)

    host_filter: Optional[HostFilter] = Field(None, alias="hostFilter")
    selections: dict[str, EnumerationArgs] = Field(
        ..., alias="fields", min_length=1, description="Field name -> enumeration arguments"
    )


# Endpoints

@router.post("/hostSystemProfile")
async def host_system_profile(
    request: SystemProfileRequest,
    account_number: str = Header(..., alias="X-Account-Number"),
):
    """Enumerate distinct values and host counts for the requested fields."""
    if not _profile:
        raise HTTPException(status_code=503, detail="System profile service not initialized")

    try:
        pages = await _profile.resolve(request.host_filter, request.selections, account_number)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UnknownFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (BackendExecutionError, TransportError) as e:
        logger.error(f"System profile backend error: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"System profile error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {name: page.to_dict() for name, page in pages.items()}


@router.get("/hostSystemProfile/fields")
async def list_fields():
    """List the enumerable system profile fields."""
    if not _profile:
        raise HTTPException(status_code=503, detail="System profile service not initialized")
    return {"fields": _profile.fields}


@router.get("/health")
async def health_check():
    """Health check for the search backend."""
    if not _profile:
        return {"available": False, "opensearch": False}

    reachable = await _profile.runner.ping()
    return {"available": True, "opensearch": reachable}
