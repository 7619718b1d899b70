"""
State Monitor - unsaved-changes tracking for application state

Watches an observable state object, compares it against a "clean" baseline
and tells listeners when it becomes dirty or clean again.

Main modules:
- monitor: StateMonitor, change status models and field path helpers
- state: AppState, a reference observable state container
- config: Settings loaded from the environment
- cli: statemonctl command line tool
"""

__version__ = "0.1.0"
__author__ = "State Monitor Team"

from .monitor import ChangeEventType, ChangeStatus, StateMonitor, create

__all__ = ["__version__", "__author__", "create", "StateMonitor", "ChangeStatus", "ChangeEventType"]
