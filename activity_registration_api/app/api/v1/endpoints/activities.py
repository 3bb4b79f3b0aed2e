"""
Activity endpoints for API v1.

Listing and reading activities is public; creating one requires an
administrator token.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from activity_registration_api.app.api.deps import get_activity_service
from activity_registration_api.app.core.errors import NotFound, StorageError
from activity_registration_api.app.core.security import require_admin
from activity_registration_api.app.schemas.activity import ActivityCreate, ActivityRead
from activity_registration_api.app.services.activity_service import ActivityService


router = APIRouter()


@router.get("/", response_model=List[ActivityRead])
def list_activities(service: ActivityService = Depends(get_activity_service)) -> List[ActivityRead]:
    """List every activity with its remaining spots."""
    try:
        return service.list_activities()
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e


@router.get("/{activity_id}", response_model=ActivityRead)
def get_activity(
    activity_id: int = Path(..., description="ID of the activity"),
    service: ActivityService = Depends(get_activity_service),
) -> ActivityRead:
    """Retrieve a single activity by its ID.  Returns 404 if it does not exist."""
    try:
        return service.get_activity(activity_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e


@router.post("/", response_model=ActivityRead, status_code=status.HTTP_201_CREATED)
def create_activity(
    activity: ActivityCreate,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: ActivityService = Depends(get_activity_service),
) -> ActivityRead:
    """Create a new activity (admin only)."""
    try:
        activity_id = service.create_activity(activity)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e
    return ActivityRead(id=activity_id, **activity.model_dump())
