"""
Reference observable application state.

A dict-backed state container that emits ``fetch_with_changes``,
``save_with_changes`` and ``reset_with_changes`` events carrying the keys
that changed. It implements the capabilities ``StateMonitor`` consumes.
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Optional

from ..monitor.models import ChangeEventType
from ..monitor.paths import deep_equal

logger = logging.getLogger(__name__)


class AppState:
    """
    A dictionary-like state that reports fetch/save/reset changes.

    Usage:
        state = AppState({"query": "", "page": 1})
        state.on("save_with_changes", lambda keys: print(keys))
        state["page"] = 2
        state.save()  # prints ['page']
    """

    def __init__(self, defaults: Optional[Dict[str, Any]] = None) -> None:
        """
        Create a new state.

        Args:
            defaults: Initial values, also used by reset() and fetch()
        """
        self._defaults: Dict[str, Any] = copy.deepcopy(defaults) if defaults else {}
        self._data: Dict[str, Any] = copy.deepcopy(self._defaults)
        self._saved: Dict[str, Any] = copy.deepcopy(self._defaults)
        self._handlers: Dict[str, List[Callable[..., Any]]] = {}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def update(self, values: Dict[str, Any]) -> None:
        self._data.update(values)

    def to_json(self) -> Dict[str, Any]:
        """Returns the underlying dictionary (not a copy)."""
        return self._data

    def on(self, event: str, handler: Callable[..., Any]) -> "AppState":
        self._handlers.setdefault(event, []).append(handler)
        return self

    def off(self, event: str, handler: Callable[..., Any]) -> "AppState":
        """Remove every registration of ``handler`` for ``event``."""
        handlers = self._handlers.get(event, [])
        self._handlers[event] = [h for h in handlers if h is not handler]
        return self

    def emit(self, event: str, *args: Any) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler(*args)

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    def save(self) -> List[str]:
        """
        Record the current data as saved.

        Returns:
            Keys that differ from the previously saved data
        """
        keys = _changed_keys(self._saved, self._data)
        self._saved = copy.deepcopy(self._data)
        self._emit_changes(ChangeEventType.SAVE, keys)
        return keys

    def fetch(self, data: Dict[str, Any]) -> List[str]:
        """
        Load externally stored data over the defaults.

        Args:
            data: Stored values

        Returns:
            Keys whose values changed
        """
        fetched = copy.deepcopy(self._defaults)
        fetched.update(copy.deepcopy(data))
        keys = _changed_keys(self._data, fetched)
        self._data = fetched
        self._emit_changes(ChangeEventType.FETCH, keys)
        return keys

    def reset(self) -> List[str]:
        """
        Restore the defaults.

        Returns:
            Keys whose values changed
        """
        keys = _changed_keys(self._data, self._defaults)
        self._data = copy.deepcopy(self._defaults)
        self._emit_changes(ChangeEventType.RESET, keys)
        return keys

    def _emit_changes(self, event_type: ChangeEventType, keys: List[str]) -> None:
        if not keys:
            return
        logger.debug(f"{event_type.value}: {keys}")
        self.emit(event_type.value, keys)

    def __repr__(self) -> str:
        return f"<AppState {self._data!r}>"


def _changed_keys(previous: Dict[str, Any], current: Dict[str, Any]) -> List[str]:
    keys = list(current) + [key for key in previous if key not in current]
    return [
        key for key in keys
        if key not in previous or key not in current or not deep_equal(previous[key], current[key])
    ]
