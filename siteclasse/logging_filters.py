# siteclasse/logging_filters.py
from __future__ import annotations
import logging
from typing import Tuple, Type

from django.core.exceptions import DisallowedHost, RequestDataTooBig


class IgnoreBruitRequetes(logging.Filter):
    """Écarte les traces d'exceptions sans intérêt pour l'exploitation.

    - DisallowedHost : sondes et scanners avec un Host non autorisé,
    - RequestDataTooBig : payload de résolution au-delà de DATA_UPLOAD_MAX_MEMORY_SIZE.
    """

    exceptions: Tuple[Type[BaseException], ...] = (DisallowedHost, RequestDataTooBig)

    def filter(self, record: logging.LogRecord) -> bool:
        exc = record.exc_info
        return not (exc and isinstance(exc[1], self.exceptions))
