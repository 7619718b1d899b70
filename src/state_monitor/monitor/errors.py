"""
Exceptions raised by the state monitor.
"""


class StateMonitorError(Exception):
    """Base class for all state monitor errors."""
    pass


class MonitorDestroyedError(StateMonitorError):
    """Raised when a listener is registered on a destroyed monitor."""
    pass


class InvalidDefaultStateError(StateMonitorError, TypeError):
    """Raised when a default state is not a plain dict."""
    pass


class InvalidListenerError(StateMonitorError, TypeError):
    """Raised when a change listener is not callable."""
    pass


class InvalidPathError(StateMonitorError, ValueError):
    """Raised when a field path cannot be parsed."""
    pass
