import logging

from firebase_admin import App, credentials, firestore, get_app, initialize_app, _apps  # type: ignore

from app.core.config import Settings

logger = logging.getLogger(__name__)


def init_firebase(settings: Settings) -> App:
    """Initialise the default Firebase app from the service-account blob.

    Safe to call repeatedly: the API process calls it at startup and every
    Celery sweep calls it before touching Firestore. Bad credentials raise.
    """
    if _apps:
        return get_app()

    proj = settings.firebase_project_id
    logger.info(f"🔍 [FCM] Initializing Firebase | project_id={proj}")
    cred = credentials.Certificate(dict(settings.FIREBASE_SERVICE_ACCOUNT))
    fb_app = initialize_app(cred, options={"projectId": proj})
    logger.info(f"✅ [FCM] Firebase app initialized. apps={len(_apps)}")
    return fb_app


def get_firestore(fb_app: App):
    return firestore.client(app=fb_app)
