from datetime import datetime, timezone as dt_timezone
from functools import partial
from typing import Any, Dict

from celery import shared_task
from celery.utils.log import get_task_logger

from app.core.config import get_settings
from app.core.firebase import get_firestore, init_firebase
from .celery_app import celery_app  # noqa: F401
from .dispatcher import send_push_via_fcm
from .schemas import SweepReport
from .service import WateringService


logger = get_task_logger(__name__)


@shared_task(name="watering.sweep_due_crops")
def sweep_due_crops_task() -> Dict[str, Any]:
    """Push reminders for every due crop and reschedule them. Returns the sweep summary."""
    settings = get_settings()
    now = datetime.now(dt_timezone.utc)
    try:
        fb_app = init_firebase(settings)
        service = WateringService(get_firestore(fb_app), send=partial(send_push_via_fcm, app=fb_app))
        report = service.run_sweep(now=now, limit=settings.SWEEP_BATCH_SIZE)
    except Exception as e:
        # Next scheduled run starts fresh; nothing to retry here.
        logger.exception(f"❌ [Sweep] Sweep failed: {e!r}")
        report = SweepReport(started_at=now, aborted=True, error=str(e))
    return report.summary()
