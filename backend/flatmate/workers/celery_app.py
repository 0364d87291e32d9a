from celery import Celery

from flatmate.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "flatmate_finder",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["flatmate.workers.tasks"],
)
celery_app.conf.beat_schedule = {
    "expire-stale-listings": {
        "task": "flatmate.workers.tasks.expire_stale_listings",
        "schedule": 24 * 60 * 60,
    },
}
