"""Event emitter for session lifecycle notifications."""
from typing import Dict, List, Callable, Optional

# Events emitted by the auth and user services
LOGIN = 'login'
LOGOUT = 'logout'
SESSION_EXPIRED = 'session_expired'


class EventEmitter:
    """Minimal observer registry keyed by event name."""

    def __init__(self):
        self._events: Dict[str, List[Callable]] = {}

    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        self._events.setdefault(event, []).append(callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes one handler, or all handlers of the event."""
        if event not in self._events:
            return self

        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [cb for cb in self._events[event] if cb != callback]

        return self

    def emit(self, event: str, *args, **kwargs):
        """Calls every handler of the event in registration order."""
        for callback in list(self._events.get(event, ())):
            callback(*args, **kwargs)

    def listener_count(self, event: str) -> int:
        return len(self._events.get(event, ()))
