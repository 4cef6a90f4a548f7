from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


def run_in_background(fn: Callable[[], None], *, name: str) -> threading.Thread:
    """Fire-and-forget on a daemon thread; failures are only logged."""

    def _target() -> None:
        try:
            fn()
        except Exception:
            logger.exception("Background task %s failed", name)

    thread = threading.Thread(target=_target, name=name, daemon=True)
    thread.start()
    return thread
