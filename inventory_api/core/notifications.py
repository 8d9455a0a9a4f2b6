# inventory_api/core/notifications.py

import logging
import threading

logger = logging.getLogger("app")


class ConnectionCounter:
    """Tracks open notification sockets. The channel carries no messages."""

    def __init__(self):
        self._lock = threading.Lock()
        self._active = 0

    @property
    def active(self) -> int:
        return self._active

    def connected(self):
        with self._lock:
            self._active += 1
        logger.info("A user connected")

    def disconnected(self):
        with self._lock:
            self._active = max(self._active - 1, 0)
        logger.info("A user disconnected")


connections = ConnectionCounter()
