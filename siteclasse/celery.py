import os
from celery import Celery

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    os.environ.get("DJANGO_SETTINGS_MODULE", "siteclasse.settings.dev")
)

# worker : celery -A siteclasse worker -l info
app = Celery("siteclasse")
app.config_from_object("django.conf:settings", namespace="CELERY")
# seule l'app grilleclasse déclare des tâches
app.autodiscover_tasks(["grilleclasse"])
