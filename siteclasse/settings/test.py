from .base import *

# Celery runs tasks inline, results kept in process memory
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_TASK_STORE_EAGER_RESULT = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

GRILLECLASSE_ESSAIS_MAX = None
GRILLECLASSE_BUDGET_TEMPS_MS = 10_000
