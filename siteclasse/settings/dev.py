from .base import *
from .base import _int_or_none, _level
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env.dev into process env for local development only.
load_dotenv(Path(BASE_DIR) / ".env.dev")


DEBUG = True
ALLOWED_HOSTS = []

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", CELERY_BROKER_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", CELERY_RESULT_BACKEND)
GRILLECLASSE_ESSAIS_MAX = _int_or_none("GRILLECLASSE_ESSAIS_MAX", GRILLECLASSE_ESSAIS_MAX)
GRILLECLASSE_BUDGET_TEMPS_MS = _int_or_none("GRILLECLASSE_BUDGET_TEMPS_MS", GRILLECLASSE_BUDGET_TEMPS_MS)
LOGGING["loggers"]["grilleclasse"]["level"] = _level("GRILLECLASSE_LOG_LEVEL", "DEBUG")
