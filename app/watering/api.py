import logging

from fastapi import APIRouter, Depends, Request

from .exceptions import ExternalServiceError, WateringError
from .schemas import CropAddedRequest, CropAddedResponse, serialize_timestamp
from .service import WateringService


logger = logging.getLogger(__name__)

router = APIRouter(tags=["watering"])


def get_watering_service(request: Request) -> WateringService:
    state = request.app.state
    return WateringService(state.firestore, send=state.push_sender)


@router.post("/onCropAdded", response_model=CropAddedResponse)
def on_crop_added_endpoint(payload: CropAddedRequest, service: WateringService = Depends(get_watering_service)):
    """Called by the app right after it writes a new user_crops document."""
    try:
        next_watering = service.on_crop_added(payload.cropId, payload.data)
    except WateringError:
        raise
    except Exception as e:
        logger.exception(f"Error in onCropAdded: {e!r}")
        raise ExternalServiceError(str(e)) from e
    return CropAddedResponse(success=True, nextWateringTimestamp=serialize_timestamp(next_watering))


@router.get("/health")
def health_check():
    return {"status": "healthy", "service": "watering-reminders"}
