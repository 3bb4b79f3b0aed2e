"""
Registration endpoints for API v1.

The caller is identified by the ``sub`` claim of their bearer token;
the static admin token has no such identity and is refused (403).
Rule violations are reported as 409 (already registered, day conflict,
no spots left) or 404 (unknown activity, not registered).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from activity_registration_api.app.api.deps import get_activity_service, get_registration_service
from activity_registration_api.app.core.errors import (
    AlreadyRegistered,
    DayConflict,
    NoSpotsAvailable,
    NotFound,
    NotRegistered,
    StorageError,
)
from activity_registration_api.app.core.security import require_user
from activity_registration_api.app.schemas.activity import ActivityRead
from activity_registration_api.app.schemas.registration import RegistrationRead
from activity_registration_api.app.services.activity_service import ActivityService
from activity_registration_api.app.services.registration_service import RegistrationService


router = APIRouter()


@router.post(
    "/activities/{activity_id}/registrations",
    response_model=RegistrationRead,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(
    activity_id: int = Path(..., description="ID of the activity to sign up for"),
    current_user: Dict[str, Any] = Depends(require_user),
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationRead:
    """Sign the current user up for an activity."""
    user_id = current_user["sub"]
    try:
        success = service.sign_up(user_id, activity_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except (AlreadyRegistered, DayConflict, NoSpotsAvailable) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e
    return RegistrationRead(success=success, user_id=user_id, activity_id=activity_id)


@router.delete(
    "/activities/{activity_id}/registrations",
    status_code=status.HTTP_204_NO_CONTENT,
)
def unregister(
    activity_id: int = Path(..., description="ID of the activity to withdraw from"),
    current_user: Dict[str, Any] = Depends(require_user),
    service: RegistrationService = Depends(get_registration_service),
) -> None:
    """Withdraw the current user from an activity, freeing its spot."""
    try:
        service.unregister(current_user["sub"], activity_id)
    except NotRegistered as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e
    return None


@router.get("/users/me/activities", response_model=List[ActivityRead])
def list_my_activities(
    current_user: Dict[str, Any] = Depends(require_user),
    service: ActivityService = Depends(get_activity_service),
) -> List[ActivityRead]:
    """Activities the current user is registered for, ordered by day and time."""
    try:
        return service.list_user_activities(current_user["sub"])
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e
