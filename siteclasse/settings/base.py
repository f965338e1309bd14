from pathlib import Path
import os
from typing import Optional


def _level(env_name: str, default: str = "INFO") -> str:
    val = os.getenv(env_name, default).upper()
    return val if val in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"} else default


def _int_or_none(env_name: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(env_name, "").strip()
    if not raw:
        return default
    if raw.lower() in {"none", "off", "0"}:
        return None
    return int(raw)


BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-change-me")
DEBUG = False  # override in dev

ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if os.getenv("DJANGO_ALLOWED_HOSTS") else []

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "grilleclasse",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "siteclasse.urls"

WSGI_APPLICATION = "siteclasse.wsgi.application"

# DB: no models, sqlite only keeps Django checks happy
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# locales
LANGUAGE_CODE = "fr-fr"
TIME_ZONE = "Europe/Paris"
USE_I18N = True
USE_TZ = True
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# LOGS
# comments in English
_CONSOLE = ["console"]
_CONSOLE_AND_MAIL = ["console", "mail_admins"]


def _logger(handlers, level: str) -> dict:
    return {"handlers": handlers, "level": level, "propagate": False}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "require_debug_false": {"()": "django.utils.log.RequireDebugFalse"},
        "skip_noise": {"()": "siteclasse.logging_filters.IgnoreBruitRequetes"},
    },
    "formatters": {
        "console": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "filters": ["skip_noise"],
        },
        # 500s only, never in DEBUG
        "mail_admins": {
            "class": "django.utils.log.AdminEmailHandler",
            "level": "ERROR",
            "filters": ["require_debug_false", "skip_noise"],
        },
    },
    "root": {"handlers": _CONSOLE, "level": _level("DJANGO_LOG_LEVEL", "INFO")},
    "loggers": {
        "django.server": _logger(_CONSOLE, _level("DJANGO_SERVER_LOG_LEVEL", "INFO")),
        "django.request": _logger(_CONSOLE_AND_MAIL, "ERROR"),
        "django.security": _logger(_CONSOLE_AND_MAIL, "ERROR"),
        "django.db.backends": _logger(_CONSOLE, _level("DJANGO_DB_LOG_LEVEL", "WARNING")),
        # solver search traces are DEBUG, outcomes INFO
        "grilleclasse": _logger(_CONSOLE, _level("GRILLECLASSE_LOG_LEVEL", "INFO")),
        "celery": _logger(_CONSOLE, _level("CELERY_LOG_LEVEL", "INFO")),
    },
}

# --- Redis / Celery ---
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/1")
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_RESULT_EXPIRES = 3600  # 1h
CELERY_TASK_TIME_LIMIT = 120  # 2 min (ajuste)
CELERY_TASK_SOFT_TIME_LIMIT = 110

# --- Solveur de placement ---
# None = no cap; the time budget stays below the Celery soft limit
GRILLECLASSE_ESSAIS_MAX = _int_or_none("GRILLECLASSE_ESSAIS_MAX")
GRILLECLASSE_BUDGET_TEMPS_MS = _int_or_none("GRILLECLASSE_BUDGET_TEMPS_MS", 20_000)
