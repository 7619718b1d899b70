"""
State monitor: baseline snapshots, dirty detection and change notification.
"""

from .errors import (
    InvalidDefaultStateError,
    InvalidListenerError,
    InvalidPathError,
    MonitorDestroyedError,
    StateMonitorError,
)
from .models import ChangeEventType, ChangeStatus
from .monitor import ObservableState, StateMonitor, create
from .paths import IGNORED_SENTINEL, FieldPath, deep_equal, deep_set, parse_path

__all__ = [
    "create",
    "StateMonitor",
    "ObservableState",
    "ChangeStatus",
    "ChangeEventType",
    "FieldPath",
    "IGNORED_SENTINEL",
    "parse_path",
    "deep_set",
    "deep_equal",
    "StateMonitorError",
    "MonitorDestroyedError",
    "InvalidDefaultStateError",
    "InvalidListenerError",
    "InvalidPathError",
]
