"""
Dirty/clean monitoring of an observable state object.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple, Union

import yaml

from .errors import InvalidDefaultStateError, InvalidListenerError, MonitorDestroyedError
from .models import ChangeEventType, ChangeStatus
from .paths import FieldPath, PathKey, PathSpec, deep_equal, format_path, mask_paths, parse_paths

logger = logging.getLogger(__name__)

ChangeListener = Callable[[ChangeStatus, Optional[ChangeEventType], List[PathKey]], None]


class ObservableState(Protocol):
    """Capabilities the monitor needs from the state it observes."""

    def to_json(self) -> Any:
        ...

    def on(self, event: str, handler: Callable[..., Any]) -> Any:
        ...

    def off(self, event: str, handler: Callable[..., Any]) -> Any:
        ...


class StateMonitor:
    """
    Tracks whether a state object has diverged from a clean baseline.

    The monitor:
    1. Keeps a deep copy of the baseline ("default state")
    2. Compares it against a fresh copy of the live state on demand,
       with ignored paths masked on both sides
    3. Notifies listeners on fetch/save/reset events of the state and
       whenever a new baseline flips the status
    """

    def __init__(self, state: ObservableState, default_state: Optional[Any] = None):
        """
        Initialize the monitor.

        Args:
            state: Observable state to watch
            default_state: Baseline to compare against. If None, the
                current state is used.
        """
        self._state = state
        self._destroyed = False
        self._subscribed = False
        self._ignored_paths: List[FieldPath] = []
        self._listeners: List[ChangeListener] = []
        self._baseline: Any = None

        # Created once so the exact same callables are passed to on() and off()
        self._state_handlers: Dict[ChangeEventType, Callable[..., None]] = {
            ChangeEventType.FETCH: self._dispatch_fetch,
            ChangeEventType.SAVE: self._dispatch_save,
            ChangeEventType.RESET: self._dispatch_reset,
        }

        self._set_baseline(default_state)

    def _set_baseline(self, default_state: Optional[Any]) -> None:
        if default_state is None:
            # to_json() may hand out internal storage; copy before masking
            default_state = self._state.to_json()
        self._baseline = copy.deepcopy(default_state)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def default_state(self) -> Any:
        """Copy of the current (masked) baseline."""
        return copy.deepcopy(self._baseline)

    @property
    def ignored_paths(self) -> Tuple[FieldPath, ...]:
        return tuple(self._ignored_paths)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def get_status(self) -> ChangeStatus:
        """
        Compare the live state against the baseline.

        Returns:
            ChangeStatus for the current state
        """
        current_state = mask_paths(copy.deepcopy(self._state.to_json()), self._ignored_paths)
        return ChangeStatus.from_clean(deep_equal(current_state, self._baseline))

    def set_default_state(self, default_state: Dict[str, Any]) -> None:
        """
        Replace the baseline.

        Listeners are notified with a generic change only if the new
        baseline flips the dirty/clean status.

        Args:
            default_state: New baseline, must be a dict

        Raises:
            InvalidDefaultStateError: If default_state is not a dict
        """
        if not isinstance(default_state, dict):
            raise InvalidDefaultStateError("The default state must be a dict")

        current_status = self.get_status()

        self._set_baseline(default_state)
        mask_paths(self._baseline, self._ignored_paths)
        logger.info(f"Default state replaced ({len(default_state)} top-level keys)")

        if current_status != self.get_status():
            self._dispatch_change()

    def ignore_props(self, paths: Union[PathSpec, Iterable[PathSpec]]) -> "StateMonitor":
        """
        Exclude field paths from the dirty comparison.

        Args:
            paths: A path (``"a.b[0]"`` or a tuple of keys) or a list of paths

        Returns:
            The monitor, for chaining
        """
        parsed = parse_paths(paths)
        self._ignored_paths.extend(parsed)
        mask_paths(self._baseline, self._ignored_paths)

        logger.debug(f"Ignoring paths: {', '.join(format_path(p) for p in parsed)}")
        return self

    def ignore_props_from_file(self, filepath: Union[str, Path]) -> "StateMonitor":
        """
        Load ignored paths from a YAML or JSON file.

        Args:
            filepath: File containing an ``ignore`` list

        Example YAML format:
            ignore:
              - query.page
              - filters[0].updated_at

        Returns:
            The monitor, for chaining
        """
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not data.get("ignore"):
            logger.warning(f"No ignored paths found in {filepath}")
            return self

        logger.info(f"Loaded {len(data['ignore'])} ignored paths from {filepath}")
        return self.ignore_props(data["ignore"])

    def on_change(self, callback: ChangeListener) -> "StateMonitor":
        """
        Register a change listener.

        The listener is called as ``callback(status, event_type, keys)``.
        If the state is already dirty, listeners are notified immediately.

        Args:
            callback: Listener to register

        Returns:
            The monitor, for chaining

        Raises:
            MonitorDestroyedError: If the monitor has been destroyed
            InvalidListenerError: If callback is not callable
        """
        if self._destroyed:
            raise MonitorDestroyedError("Monitor has been destroyed")
        if not callable(callback):
            raise InvalidListenerError("on_change handler must be callable")

        self._listeners.append(callback)
        self._subscribe()

        if self.get_status().dirty:
            self._dispatch_change()

        return self

    def destroy(self) -> None:
        """Stop listening to the state and drop all listeners."""
        if self._destroyed:
            return

        self._destroyed = True
        self._listeners = []
        self._unsubscribe()
        logger.info("State monitor destroyed")

    def _subscribe(self) -> None:
        if self._subscribed:
            return
        for event_type, handler in self._state_handlers.items():
            self._state.on(event_type.value, handler)
        self._subscribed = True
        logger.debug("Subscribed to state change events")

    def _unsubscribe(self) -> None:
        if not self._subscribed:
            return
        for event_type, handler in self._state_handlers.items():
            self._state.off(event_type.value, handler)
        self._subscribed = False
        logger.debug("Unsubscribed from state change events")

    def _dispatch_change(
        self,
        event_type: Optional[ChangeEventType] = None,
        keys: Optional[Iterable[PathKey]] = None,
    ) -> None:
        if self._destroyed:
            return

        status = self.get_status()
        if keys is None:
            keys = []
        elif isinstance(keys, (str, int)):
            keys = [keys]
        else:
            keys = list(keys)
        logger.debug(
            f"Dispatching {event_type.value if event_type else 'change'} "
            f"(dirty={status.dirty}) to {len(self._listeners)} listeners"
        )

        # Listener errors propagate and stop the remaining listeners
        for listener in list(self._listeners):
            listener(status, event_type, keys)

    def _dispatch_fetch(self, keys: Optional[Iterable[PathKey]] = None, *_args: Any) -> None:
        self._dispatch_change(ChangeEventType.FETCH, keys)

    def _dispatch_save(self, keys: Optional[Iterable[PathKey]] = None, *_args: Any) -> None:
        self._dispatch_change(ChangeEventType.SAVE, keys)

    def _dispatch_reset(self, keys: Optional[Iterable[PathKey]] = None, *_args: Any) -> None:
        self._dispatch_change(ChangeEventType.RESET, keys)


def create(state: ObservableState, default_state: Optional[Any] = None) -> StateMonitor:
    """
    Create a monitor for a state object.

    Args:
        state: Observable state to watch
        default_state: Optional baseline (defaults to the current state)

    Returns:
        StateMonitor instance
    """
    return StateMonitor(state, default_state)
