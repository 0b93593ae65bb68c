# daraja/mpesa/state.py

import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DarajaState:
    message: str = ""
    is_loading: bool = False

    def to_dict(self):
        return {"message": self.message, "is_loading": self.is_loading}


class StateFlow:
    """
    Read-only holder of the latest value. New subscribers get the current
    value straight away, then every value that follows, in order.
    """

    def __init__(self, initial):
        self._value = initial
        self._subscribers = []
        self._lock = threading.RLock()

    @property
    def value(self):
        return self._value

    def subscribe(self, callback):
        """Register callback(value); returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers.append(callback)
            self._deliver(callback, self._value)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    @staticmethod
    def _deliver(callback, value):
        try:
            callback(value)
        except Exception:
            logger.exception("State subscriber %r failed", callback)


class MutableStateFlow(StateFlow):

    @StateFlow.value.setter
    def value(self, new_value):
        with self._lock:
            self._value = new_value
            for callback in list(self._subscribers):
                self._deliver(callback, new_value)

    def as_state_flow(self):
        """Read-only view: reads and subscriptions, no way to set the value."""
        return ReadOnlyStateFlow(self)


class ReadOnlyStateFlow(StateFlow):

    def __init__(self, flow):
        self._flow = flow

    @property
    def value(self):
        return self._flow.value

    def subscribe(self, callback):
        return self._flow.subscribe(callback)
