from .base import *
import os
from typing import List


def _liste_env(nom: str, defaut: str = "") -> List[str]:
    # "a, b,,c" -> ["a", "b", "c"]
    return [v.strip() for v in os.getenv(nom, defaut).split(",") if v.strip()]


DEBUG = False

ALLOWED_HOSTS = _liste_env("DJANGO_ALLOWED_HOSTS", "localhost")
CSRF_TRUSTED_ORIGINS = _liste_env("CSRF_TRUSTED_ORIGINS")

# derrière Nginx qui termine le TLS
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = True
# la sonde de liveness reste en HTTP
SECURE_REDIRECT_EXEMPT = [r"^healthz$"]
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"
X_FRAME_OPTIONS = "DENY"

# un gros roster reste bien en dessous ; au-delà, RequestDataTooBig
DATA_UPLOAD_MAX_MEMORY_SIZE = int(os.getenv("DJANGO_MAX_BODY_BYTES", str(1024 * 1024)))

# destinataires des erreurs 500 (handler mail_admins)
ADMINS = [(adresse, adresse) for adresse in _liste_env("DJANGO_ADMINS")]
SERVER_EMAIL = os.getenv("SERVER_EMAIL", "root@localhost")

EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
EMAIL_HOST = os.getenv("EMAIL_HOST", "")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "true").lower() == "true"
EMAIL_TIMEOUT = 10  # s
