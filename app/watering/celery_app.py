from celery import Celery
from celery.schedules import crontab

from app.core.config import get_settings


settings = get_settings()

celery_app = Celery(
    "watering",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND or None,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    worker_prefetch_multiplier=1,
    include=["app.watering.tasks"],
)

# Celery Beat schedule: minute divisible by 15, every hour, every day
celery_app.conf.beat_schedule = {
    "sweep-due-crops": {
        "task": "watering.sweep_due_crops",
        "schedule": crontab(minute=settings.SWEEP_CRON_MINUTE),
    },
}
