from __future__ import annotations

import secrets
import string
import time

from ..core.constants import STUDENT_ID_PREFIX, STUDENT_ID_RANDOM_LENGTH

_BASE36 = string.digits + string.ascii_lowercase


def generate_student_id() -> str:
    """``STU_<epoch millis>_<random base36>``: time component plus random suffix."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(STUDENT_ID_RANDOM_LENGTH))
    return f"{STUDENT_ID_PREFIX}{millis}_{suffix}"
