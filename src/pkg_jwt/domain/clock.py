from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Current UTC time as integer epoch seconds."""
    return int(time.time())
