"""
In-flight guard — prevents duplicate submission of the same operation.

Tokens are keyed by (operation, entity id), so a second save of the same
product is rejected while the first is running, but saving another
product or adjusting a location proceeds normally.
"""

import threading
from contextlib import contextmanager

from smartstock.exceptions import WarehouseError

NEW = 'new'


class InFlight:
    """Registry of running (operation, entity) tokens."""

    def __init__(self):
        self._lock = threading.Lock()
        self._running: set[tuple[str, str]] = set()

    def is_running(self, operation: str, entity_id=None) -> bool:
        with self._lock:
            return (operation, str(entity_id or NEW)) in self._running

    @contextmanager
    def claim(self, operation: str, entity_id=None):
        """
        Hold the token for the duration of the block.

        Raises:
            WarehouseError('OPERATION_IN_PROGRESS'): If the token is taken
        """
        token = (operation, str(entity_id or NEW))
        with self._lock:
            if token in self._running:
                raise WarehouseError(
                    'OPERATION_IN_PROGRESS',
                    operation=operation,
                    entity_id=token[1],
                )
            self._running.add(token)
        try:
            yield token
        finally:
            with self._lock:
                self._running.discard(token)
