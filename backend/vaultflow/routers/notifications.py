from dataclasses import asdict

from fastapi import APIRouter, Depends

from vaultflow.dependencies import get_error_handler
from vaultflow.schemas.notification import NotificationResponse
from vaultflow.services.error_service import ErrorHandler

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(errors: ErrorHandler = Depends(get_error_handler)):
    return [NotificationResponse(**asdict(n)) for n in errors.notifications]


@router.delete("")
async def clear_notifications(errors: ErrorHandler = Depends(get_error_handler)):
    errors.clear()
    return {"message": "Notifications cleared"}
