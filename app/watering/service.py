import logging
from datetime import datetime, timezone as dt_timezone
from typing import Any, Callable, Optional

from firebase_admin import messaging  # type: ignore

from . import repository as repo
from .dispatcher import build_watering_message, send_push_via_fcm
from .exceptions import NotFoundError, ValidationError
from .interval import next_due
from .metrics import (
    crops_rescheduled_total,
    crops_scheduled_total,
    reminders_failed_total,
    reminders_sent_total,
    reminders_skipped_total,
    sweeps_aborted_total,
    sweeps_total,
)
from .schemas import (
    CropAddedData,
    NotificationOutcome,
    RecordResult,
    RescheduleOutcome,
    SweepReport,
    coerce_timestamp,
)


logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing plantedTimestamp or cropId"


class WateringService:
    """Computes and advances ``nextWateringTimestamp`` on user_crops.

    ``db`` is a Firestore client; ``send`` delivers one FCM message and is
    swapped out in tests.
    """

    def __init__(self, db, send: Optional[Callable[[messaging.Message], Any]] = None):
        self.db = db
        self.send = send or send_push_via_fcm

    # =========================================================================
    # Crop added
    # =========================================================================

    def on_crop_added(self, user_crop_id: Optional[str], data: Optional[CropAddedData]) -> datetime:
        """Set the first watering time for a freshly planted crop.

        Returns the stored ``nextWateringTimestamp`` (plantedTimestamp plus the
        crop definition's interval). Nothing is written on any error.
        """
        data = data or CropAddedData()
        if not user_crop_id or not data.plantedTimestamp or not data.cropId:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        try:
            planted = coerce_timestamp(data.plantedTimestamp)
        except (ValueError, TypeError, OverflowError):
            raise ValidationError("Invalid plantedTimestamp")

        crop = repo.get_crop_definition(self.db, data.cropId)
        if crop is None:
            raise NotFoundError("Crop not found")

        next_watering = next_due(planted, crop.get("wateringInterval"))
        if next_watering is None:
            raise ValidationError("Invalid interval")

        repo.set_next_watering(self.db, user_crop_id, next_watering)
        crops_scheduled_total.inc()
        logger.info(
            f"🌱 [CropAdded] user_crop={user_crop_id} crop={data.cropId} user={data.userId} "
            f"next_watering={next_watering.isoformat()}"
        )
        return next_watering

    # =========================================================================
    # Reminder sweep
    # =========================================================================

    def run_sweep(self, now: Optional[datetime] = None, limit: Optional[int] = None) -> SweepReport:
        """Notify and reschedule every crop due at ``now``, one at a time.

        A failed push still reschedules its crop. A failed store call stops
        the pass; whatever was processed before it stays in the report.
        """
        now = now or datetime.now(dt_timezone.utc)
        report = SweepReport(started_at=now)
        sweeps_total.inc()
        logger.info(f"🕒 [Sweep] Checking watering reminders at {now.isoformat()}")

        try:
            due = repo.get_due_user_crops(self.db, now, limit=limit)
        except Exception as e:
            logger.exception(f"❌ [Sweep] Due crop query failed: {e!r}")
            return self._abort(report, e)

        if not due:
            logger.info("[Sweep] No due crops")
            return report

        logger.info(f"🧭 [Sweep] Due crops: {len(due)}")
        for snap in due:
            try:
                result = self._process_due_crop(snap, now)
            except Exception as e:
                logger.exception(f"❌ [Sweep] Processing failed for user_crop={snap.id}: {e!r}")
                return self._abort(report, e)

            report.results.append(result)
            if result.reschedule == RescheduleOutcome.FAILED:
                sweeps_aborted_total.inc()
                report.aborted = True
                report.error = result.error
                return report

        logger.info(f"✅ [Sweep] Done | {report.summary()}")
        return report

    def _abort(self, report: SweepReport, error: Exception) -> SweepReport:
        sweeps_aborted_total.inc()
        report.aborted = True
        report.error = str(error)
        return report

    def _process_due_crop(self, snap, now: datetime) -> RecordResult:
        data = snap.to_dict() or {}
        user_id = data.get("userId")
        interval = data.get("wateringInterval")

        token = repo.get_farmer_token(self.db, user_id)
        if not token:
            reminders_skipped_total.inc()
            logger.info(f"[Sweep] Skipping user_crop={snap.id}: no farmer or FCM token for user {user_id}")
            return RecordResult(
                user_crop_id=snap.id,
                user_id=user_id,
                notification=NotificationOutcome.SKIPPED,
                reschedule=RescheduleOutcome.SKIPPED,
            )

        notification = self._notify(token, data.get("cropType"), interval, snap.id, user_id)

        # Anchored to sweep start, not the previous due time.
        next_watering = next_due(now, interval)
        if next_watering is None:
            logger.warning(f"⚠️  [Sweep] user_crop={snap.id} has unusable interval {interval!r}; left due")
            return RecordResult(
                user_crop_id=snap.id,
                user_id=user_id,
                notification=notification,
                reschedule=RescheduleOutcome.INVALID_INTERVAL,
            )

        try:
            repo.set_next_watering(self.db, snap.id, next_watering)
        except Exception as e:
            logger.exception(f"❌ [Sweep] Failed to reschedule user_crop={snap.id}: {e!r}")
            return RecordResult(
                user_crop_id=snap.id,
                user_id=user_id,
                notification=notification,
                reschedule=RescheduleOutcome.FAILED,
                error=str(e),
            )

        crops_rescheduled_total.inc()
        return RecordResult(
            user_crop_id=snap.id,
            user_id=user_id,
            notification=notification,
            reschedule=RescheduleOutcome.RESCHEDULED,
            next_watering=next_watering,
        )

    def _notify(self, token: str, crop_type: Optional[str], interval: Optional[str], user_crop_id: str, user_id: Optional[str]) -> NotificationOutcome:
        try:
            message = build_watering_message(token, crop_type, interval, user_crop_id)
            self.send(message)
        except Exception as e:
            reminders_failed_total.inc()
            logger.error(f"❌ [FCM] Failed to send notification for farmer {user_id}: {e!r}")
            return NotificationOutcome.FAILED
        reminders_sent_total.inc()
        logger.info(f"Notification sent for farmer {user_id}")
        return NotificationOutcome.SENT
