import logging
from typing import Optional

from firebase_admin import App, messaging  # type: ignore


logger = logging.getLogger(__name__)

REMINDER_TITLE = "Time to Water!"
DEFAULT_CROP_TYPE = "your plant"


def build_watering_message(token: str, crop_type: Optional[str], interval: Optional[str], user_crop_id: str) -> messaging.Message:
    body = f"Don't forget to water your {crop_type or DEFAULT_CROP_TYPE}. It's been {interval}!"
    return messaging.Message(
        token=token,
        notification=messaging.Notification(title=REMINDER_TITLE, body=body),
        data={
            "type": "watering_reminder",
            "userCropId": str(user_crop_id),
        },
    )


def send_push_via_fcm(message: messaging.Message, app: Optional[App] = None) -> str:
    """Send one message through FCM and return the provider's message id.

    Errors from the provider propagate; the sweep decides what to do with them.
    """
    logger.info(f"🚀 [FCM] Sending notification to token: {message.token[:20]}...")
    result = messaging.send(message, app=app)
    logger.info(f"✅ [FCM] Notification sent successfully: {result}")
    return result
