# novacart/celery_worker.py
from celery import Celery

from novacart.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CELERY_TASK_ALWAYS_EAGER

celery_app = Celery(
    "novacart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

#tasks have to be imported explicitly so the worker registers them
celery_app.conf.imports = (
    "novacart.services.notification_service",
)

celery_app.conf.timezone = "UTC"
#local dev / tests: run tasks in-process, no broker needed
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
